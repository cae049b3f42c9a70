from utils.logger import Logger


def test_set_debug_leaves_directories_alone(tmp_path):
    Logger.set_debug(True, str(tmp_path / "new" / "debug.log"))
    Logger.debug("not written anywhere")
    assert not (tmp_path / "new").exists()


def test_debug_lines_go_to_file_only(tmp_path, capsys):
    debug_log = tmp_path / "debug.log"
    Logger.set_debug(True, str(debug_log))
    Logger.debug("pvs exited with 5")
    Logger.info("Generating read-only LVM report...")

    out = capsys.readouterr().out
    assert "[DEBUG]" not in out
    assert "[INFO] Generating read-only LVM report..." in out
    assert "[DEBUG] pvs exited with 5" in debug_log.read_text(encoding="utf-8")


def test_errors_go_to_stderr(capsys):
    Logger.error("Failed to write report to /x")
    captured = capsys.readouterr()
    assert "[ERROR] Failed to write report to /x" in captured.err
    assert captured.out == ""


def test_debug_disabled_is_silent(tmp_path, capsys):
    Logger.set_debug(False, str(tmp_path / "debug.log"))
    Logger.debug("hidden")
    assert capsys.readouterr().out == ""
    assert not (tmp_path / "debug.log").exists()
