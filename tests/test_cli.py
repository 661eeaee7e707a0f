import importlib
import json
import sys

import pytest

# We import run.py as a module and exercise parse_args + main with a patched
# start_server so we do not actually start networking.


@pytest.fixture()
def run_module(monkeypatch):
    # Ensure a clean import each time (important because run.py reads VERSION once)
    if "run" in sys.modules:
        del sys.modules["run"]
    mod = importlib.import_module("run")
    return mod


@pytest.fixture()
def fake_server(monkeypatch):
    calls = {}

    def fake_start_server(host, port, debug):  # signature match
        calls["called"] = True
        calls["host"] = host
        calls["port"] = port
        calls["debug"] = debug

    # Patch the module run.main imports from, so its late import picks this up
    import cryptforge.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    return calls


def test_version_flag_outputs_version(run_module, capsys):
    ver = run_module.__version__
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    captured = capsys.readouterr().out
    assert ver in captured
    assert "Cryptforge" in captured


def test_default_command_is_server(run_module):
    ns = run_module.parse_args([])
    assert ns.command == "server"


def test_server_main_invokes_start_server(monkeypatch, run_module, fake_server, capsys):
    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    exit_code = run_module.main(["server"])
    assert exit_code == 0
    assert fake_server == {"called": True, "host": "127.0.0.1", "port": 5555, "debug": False}
    assert "Cryptforge Dungeon API" in capsys.readouterr().out


def test_server_flags_override_env(monkeypatch, run_module, fake_server):
    monkeypatch.setenv("PORT", "5555")
    run_module.main(["server", "--port", "6060", "--host", "localhost", "--debug"])
    assert fake_server["port"] == 6060
    assert fake_server["host"] == "localhost"
    assert fake_server["debug"] is True


def test_env_file_argument(monkeypatch, tmp_path, run_module, fake_server):
    # setenv first so teardown restores PORT whatever load_dotenv leaves behind
    monkeypatch.setenv("PORT", "0")
    monkeypatch.delenv("PORT")
    env_file = tmp_path / ".env"
    env_file.write_text("PORT=6001\n")
    run_module.main(["--env-file", str(env_file), "server"])
    assert fake_server["port"] == 6001


def test_generate_prints_ascii(run_module, capsys):
    code = run_module.main(["generate", "--seed", "abc", "--width", "30", "--height", "20", "--rooms", "5"])
    assert code == 0
    lines = capsys.readouterr().out.rstrip("\n").split("\n")
    assert len(lines) == 20
    assert lines[0] == "#" * 30


def test_generate_writes_json(run_module, tmp_path):
    out = tmp_path / "dungeon.json"
    code = run_module.main(
        ["generate", "--preset", "cave", "--seed", "42", "--format", "json", "--output", str(out), "--loops"]
    )
    assert code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["seed"] == 42
    assert data["theme"] == "cave"
    assert data["params"]["create_loops"] is True
    assert data["params"]["hallway_style"] == "organic"


def test_generate_output_matches_library(run_module, capsys):
    from cryptforge.dungeon import DungeonGenerator, preset

    run_module.main(["generate", "--preset", "small", "--seed", "7"])
    expected = DungeonGenerator(preset("small", seed=7)).generate().to_ascii()
    assert capsys.readouterr().out == expected + "\n"


def test_generate_unknown_preset_fails(run_module, capsys):
    code = run_module.main(["generate", "--preset", "dragon-lair"])
    assert code == 2
    assert "[ERROR]" in capsys.readouterr().err
