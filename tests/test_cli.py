import json

from memcnf.cli import main


def write(tmp_path, document):
    path = tmp_path / "program.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return str(path)


def test_no_file_fails(capsys):
    assert main([]) == 1
    assert "No input file specified" in capsys.readouterr().err


def test_missing_file_fails(tmp_path, capsys):
    assert main([str(tmp_path / "absent.json")]) == 1
    captured = capsys.readouterr()
    assert "Failed to open file" in captured.err
    assert "Error:" in captured.err


def test_valid_program_succeeds(tmp_path, capsys):
    path = write(tmp_path, {"code": {"rows": [{"id": 1, "variable": "p", "value": "malloc"}]}})
    assert main([path]) == 0
    captured = capsys.readouterr()
    assert "p cnf 4 5" in captured.out
    assert "Решение" in captured.out
    assert "Name: p" in captured.err
    assert "Total variables:" in captured.err


def test_sample_clauses_printed(tmp_path, capsys):
    path = write(tmp_path, {"code": {"rows": []}})
    main([path])
    out = capsys.readouterr().out
    assert "10000000 00000000" in out
    assert "01000000 00000000" in out
    assert "-----------------------" in out


def test_soft_error_returns_failure(tmp_path, capsys):
    path = write(tmp_path, {"code": {"rows": [{"id": 1, "operation": {}}]}})
    assert main([path]) == 1
    assert "Error:" in capsys.readouterr().err