import pytest

from employee_directory_api.app.core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from employee_directory_api.app.core.security import decode_access_token
from employee_directory_api.app.services.account_service import TOKEN_LIFETIME_SECONDS


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "username, email, password, message",
    [
        (None, "jdoe@example.com", "s3cretpass", "Username must be at least 3 characters long!"),
        ("jd", "jdoe@example.com", "s3cretpass", "Username must be at least 3 characters long!"),
        ("jdoe", "jdoe.example.com", "s3cretpass", "Invalid email format!"),
        ("jdoe", None, "s3cretpass", "Invalid email format!"),
        ("jdoe", "jdoe@example.com", "12345", "Password must be at least 6 characters long!"),
        ("jd", "bad", "123", "Username must be at least 3 characters long!"),
    ],
)
async def test_register_validation_happens_before_storage(account_service, accounts, username, email, password, message):
    with pytest.raises(ValidationError) as exc_info:
        await account_service.register(username, email, password)
    assert exc_info.value.message == message
    assert accounts.calls == []


@pytest.mark.asyncio
async def test_register_stores_hash_not_plaintext(account_service, accounts):
    message = await account_service.register("jdoe", "jdoe@example.com", "s3cretpass")
    assert message == "User registered successfully!"
    (stored,) = accounts.docs.values()
    assert stored["username"] == "jdoe"
    assert stored["email"] == "jdoe@example.com"
    assert stored["password"] != "s3cretpass"


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(account_service, accounts):
    await account_service.register("jdoe", "jdoe@example.com", "s3cretpass")
    with pytest.raises(ConflictError) as exc_info:
        await account_service.register("other", "jdoe@example.com", "anotherpass")
    assert exc_info.value.message == "Email already in use"
    assert len(accounts.docs) == 1


@pytest.mark.asyncio
async def test_authenticate_returns_token_for_account(account_service, accounts, settings):
    await account_service.register("jdoe", "jdoe@example.com", "s3cretpass")
    (account_id,) = accounts.docs.keys()

    token = await account_service.authenticate("jdoe@example.com", "s3cretpass")
    claims = decode_access_token(token, settings.secret_key)
    assert claims["sub"] == account_id
    assert claims["user_id"] == account_id
    assert claims["email"] == "jdoe@example.com"
    assert claims["exp"] - claims["iat"] == 3600


@pytest.mark.asyncio
async def test_authenticate_wrong_password(account_service):
    await account_service.register("jdoe", "jdoe@example.com", "s3cretpass")
    with pytest.raises(AuthError) as exc_info:
        await account_service.authenticate("jdoe@example.com", "wrongpass")
    assert exc_info.value.message == "Incorrect password!"


@pytest.mark.asyncio
async def test_authenticate_unknown_email(account_service):
    with pytest.raises(NotFoundError) as exc_info:
        await account_service.authenticate("nobody@example.com", "s3cretpass")
    assert exc_info.value.message == "User not found!"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "username, email, password, message",
    [
        (12345, "jdoe@example.com", "s3cretpass", "Username must be at least 3 characters long!"),
        ("jdoe", {"at": "@"}, "s3cretpass", "Invalid email format!"),
        ("jdoe", "jdoe@example.com", 12345678, "Password must be at least 6 characters long!"),
    ],
)
async def test_register_rejects_wrong_types(account_service, accounts, username, email, password, message):
    with pytest.raises(ValidationError) as exc_info:
        await account_service.register(username, email, password)
    assert exc_info.value.message == message
    assert accounts.calls == []


@pytest.mark.asyncio
async def test_token_lifetime_is_fixed_at_one_hour(account_service, settings):
    await account_service.register("jdoe", "jdoe@example.com", "s3cretpass")
    token = await account_service.authenticate("jdoe@example.com", "s3cretpass")
    claims = decode_access_token(token, settings.secret_key)
    assert claims["exp"] - claims["iat"] == TOKEN_LIFETIME_SECONDS == 3600
