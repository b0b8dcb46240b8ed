from pathlib import Path

from app import config


def test_defaults_without_environment():
    env = {}
    assert config.get_tasks_path(env) == Path("data/tasks.json")
    assert config.is_logging_enabled(env) is True
    assert config.get_command_log_path(env) == Path("logs") / "commands.jsonl"
    assert config.get_log_max_bytes(env) == 1_000_000
    assert config.get_log_backup_count(env) == 5
    assert config.get_log_level(env) == "WARNING"
    assert config.get_undo_depth(env) == 20
    assert config.get_sync_url(env) is None
    assert config.get_sync_timeout(env) == 8.0
    assert config.get_web_host(env) == "127.0.0.1"
    assert config.get_web_port(env) == 9000


def test_environment_overrides():
    env = {
        "TASKS_PATH": "/tmp/tasks.json",
        "LOGGING_ENABLED": "off",
        "LOG_DIR": "/var/log/quicktodo",
        "LOG_LEVEL": "debug",
        "UNDO_DEPTH": "3",
        "SYNC_URL": " https://sync.example/tasks ",
        "SYNC_TIMEOUT": "2.5",
        "WEB_PORT": "8080",
    }
    assert config.get_tasks_path(env) == Path("/tmp/tasks.json")
    assert config.is_logging_enabled(env) is False
    assert config.get_command_log_path(env) == Path("/var/log/quicktodo/commands.jsonl")
    assert config.get_log_level(env) == "DEBUG"
    assert config.get_undo_depth(env) == 3
    assert config.get_sync_url(env) == "https://sync.example/tasks"
    assert config.get_sync_timeout(env) == 2.5
    assert config.get_web_port(env) == 8080


def test_invalid_values_fall_back_to_defaults():
    env = {
        "LOGGING_ENABLED": "maybe",
        "LOG_MAX_BYTES": "lots",
        "LOG_BACKUP_COUNT": "-4",
        "LOG_LEVEL": "chatty",
        "UNDO_DEPTH": "0",
        "SYNC_URL": "   ",
        "SYNC_TIMEOUT": "-1",
        "WEB_PORT": "70000",
    }
    assert config.is_logging_enabled(env) is True
    assert config.get_log_max_bytes(env) == 1_000_000
    assert config.get_log_backup_count(env) == 0
    assert config.get_log_level(env) == "WARNING"
    assert config.get_undo_depth(env) == 1
    assert config.get_sync_url(env) is None
    assert config.get_sync_timeout(env) == 8.0
    assert config.get_web_port(env) == 9000


def test_build_controller_uses_environment(tmp_path, monkeypatch):
    from app.main import build_controller

    monkeypatch.setenv("TASKS_PATH", str(tmp_path / "tasks.json"))
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    controller = build_controller()
    response = controller.handle_message("add Wired up;")
    assert response.success is True
    assert (tmp_path / "tasks.json").exists()
    assert (tmp_path / "logs" / "commands.jsonl").exists()
