import readline

from mishell.history import history_lines, load_history, save_history


def test_history_survives_save_and_load(tmp_path, capsys):
    path = str(tmp_path / "hist")
    readline.clear_history()
    readline.add_history("echo one")
    readline.add_history("ls | wc")
    save_history(path)

    readline.clear_history()
    load_history(path)
    assert history_lines() == [(1, "echo one"), (2, "ls | wc")]
    readline.clear_history()


def test_missing_history_file_is_ignored(tmp_path):
    readline.clear_history()
    load_history(str(tmp_path / "missing"))
    assert history_lines() == []
