import pytest

from routine_api.reset_password import main


@pytest.mark.asyncio
async def test_reset_password_cli(services, settings, make_user, capsys):
    await make_user()

    assert main(["--db", settings.database_url, "--email", "JANE@example.com", "--password", "brandnew"]) == 0
    assert "Password updated" in capsys.readouterr().out

    result = await services.users.login("jane@example.com", "brandnew", None)
    assert result.user.email == "jane@example.com"


@pytest.mark.asyncio
async def test_reset_password_cli_unknown_user(settings, make_user):
    await make_user()
    assert main(["--db", settings.database_url, "--email", "ghost@example.com", "--password", "brandnew"]) == 2
    assert main(["--db", settings.database_url, "--email", "jane@example.com", "--password", "123"]) == 1


def test_reset_password_cli_missing_db(tmp_path):
    assert main(["--db", str(tmp_path / "nope.db"), "--email", "a@b.cd", "--password", "brandnew"]) == 1
