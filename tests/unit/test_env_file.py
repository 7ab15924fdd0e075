import pytest

from uiscenario.runner.env_file import load_env_file, parse_env_lines
from uiscenario.runner.errors import EnvFileNotFoundError


def test_parse_env_lines():
    lines = [
        "# comment\n",
        "\n",
        "BASE_URL=https://x.test\n",
        "  TOKEN = abc==  \n",
        "QUERY=a=1&b=2\n",
        "EMPTY=\n",
        "   # indented comment\n",
        "=no-key\n",
        "NO_EQUALS\n",
    ]
    assert parse_env_lines(lines) == {
        "BASE_URL": "https://x.test",
        "TOKEN": "abc==",
        "QUERY": "a=1&b=2",
        "EMPTY": "",
        "NO_EQUALS": "",
    }


def test_later_keys_win():
    assert parse_env_lines(["A=1", "A=2"]) == {"A": "2"}


def test_load_env_file(tmp_path):
    path = tmp_path / ".env"
    path.write_text("USER=alice\nPASS=s3cr=t\n", encoding="utf-8")

    env = load_env_file(str(path))

    assert dict(env) == {"USER": "alice", "PASS": "s3cr=t"}
    with pytest.raises(TypeError):
        env["USER"] = "bob"


def test_missing_env_file_is_fatal(tmp_path):
    with pytest.raises(EnvFileNotFoundError) as exc_info:
        load_env_file(str(tmp_path / ".env"))
    assert exc_info.value.path.endswith(".env")
    assert ".env.example" in str(exc_info.value)
