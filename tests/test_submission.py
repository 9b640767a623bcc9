import os
import stat
from pathlib import Path

import numpy as np
import pytest

import carprice.submission as submission
from carprice.submission import build_submission, format_value, submission_lines, write_submission


def test_export_format(tmp_path):
    record = build_submission("Richardo", "20902543", 0.87, [9.21, 8.95, 10.02])
    path = write_submission(record, tmp_path / "submission.csv")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == ["Richardo", "20902543", "0.87", "Random Forest", "9.21", "8.95", "10.02"]


def test_numpy_values_render_as_plain_floats():
    assert format_value(np.float64(9.21)) == "9.21"
    assert format_value(np.float32(0.5)) == "0.5"
    assert format_value(10) == "10.0"


def test_lines_keep_prediction_order():
    preds = np.array([3.0, 1.0, 2.0])
    record = build_submission("a", "b", 0.5, preds, model_label="Random Forest")
    assert submission_lines(record)[4:] == ["3.0", "1.0", "2.0"]


def test_existing_file_is_overwritten(tmp_path):
    target = tmp_path / "submission.csv"
    target.write_text("stale\n" * 20, encoding="utf-8")
    write_submission(build_submission("a", "b", 0.1, [1.5]), target)
    assert target.read_text(encoding="utf-8") == "a\nb\n0.1\nRandom Forest\n1.5\n"


def test_failed_write_leaves_no_partial_file(tmp_path, monkeypatch):
    calls = []

    def _exploding(value):
        calls.append(value)
        if len(calls) > 2:
            raise OSError("disk full")
        return repr(float(value))

    monkeypatch.setattr(submission, "format_value", _exploding)
    target = tmp_path / "submission.csv"
    with pytest.raises(OSError, match="disk full"):
        write_submission(build_submission("a", "b", 0.1, [1.0, 2.0, 3.0]), target)
    assert not target.exists()
    assert list(tmp_path.iterdir()) == []


def test_missing_directory_is_reported(tmp_path):
    with pytest.raises(OSError):
        write_submission(build_submission("a", "b", 0.1, [1.0]), Path(tmp_path / "nope" / "s.csv"))


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_replaced_file_keeps_its_mode(tmp_path):
    target = tmp_path / "submission.csv"
    target.write_text("old\n", encoding="utf-8")
    target.chmod(0o644)
    write_submission(build_submission("a", "b", 0.1, [1.5]), target)
    assert stat.S_IMODE(target.stat().st_mode) == 0o644


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_new_file_follows_umask(tmp_path):
    umask = os.umask(0o022)
    try:
        path = write_submission(build_submission("a", "b", 0.1, [1.5]), tmp_path / "submission.csv")
    finally:
        os.umask(umask)
    assert stat.S_IMODE(path.stat().st_mode) == 0o644
