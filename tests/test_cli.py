"""
Tests for the assetnav command line interface.
"""

import json

import pytest

from assetnav.cli import main, parse_fields


def run_cli(capsys, argv):
    """Run the CLI and return (exit code, stdout). Commands that print JSON return normally."""
    code = None
    try:
        main(argv)
    except SystemExit as e:
        code = e.code
    return code, capsys.readouterr().out


class TestFolderCommand:

    def test_success(self, sim_assets, capsys):
        code, out = run_cli(capsys, ["--root", sim_assets["root"], "folder", "U2524",
                                     "--name", "Valley View Business Park"])
        assert code == 0
        assert out.strip() == "SUCCESS:U2524_ Valley View Business Park"

    def test_not_found_lists_folders(self, sim_assets, capsys):
        code, out = run_cli(capsys, ["--root", sim_assets["root"], "folder", "U9999"])
        assert code == 0
        lines = out.strip().splitlines()
        assert lines[0].startswith("ERROR:The project folder")
        assert lines[1].startswith("AVAILABLE:")
        assert "U2961_ JMEUC PUMP STATION" in lines[1].split("|")

    def test_missing_root(self, tmp_path, capsys):
        code, out = run_cli(capsys, ["--root", str(tmp_path / "nope"), "folder", "U2524"])
        assert code == 0
        assert out.strip().startswith("ERROR:")
        assert "AVAILABLE" not in out


def test_tree_command_prints_json(sim_assets, capsys):
    code, out = run_cli(capsys, ["--root", sim_assets["root"], "tree", "U2961"])
    assert code is None
    result = json.loads(out)
    assert result["projectFolder"] == "U2961_ JMEUC PUMP STATION"
    assert [n["name"] for n in result["data"]][:3] == ["AE Commands", "Contract Drawing", "Documents"]


def test_tree_command_depth(sim_assets, capsys):
    code, out = run_cli(capsys, ["--root", sim_assets["root"], "tree", "U2961", "--depth", "0"])
    assert code is None
    documents = json.loads(out)["data"][2]
    assert documents["name"] == "Documents"
    assert "children" not in documents


@pytest.mark.parametrize("command", ["tree U2961", "sidebar"])
@pytest.mark.parametrize("depth", ["-1", "deep"])
def test_invalid_depth_rejected(capsys, command, depth):
    with pytest.raises(SystemExit) as exc:
        main(command.split() + ["--depth", depth])
    assert exc.value.code == 2
    assert "depth" in capsys.readouterr().err


def test_sidebar_command_depth_override(sim_assets, capsys):
    code, out = run_cli(capsys, ["--root", sim_assets["root"], "sidebar", "--depth", "0"])
    assert code is None
    project = json.loads(out)["data"][0]
    documents = project["children"][2]
    assert documents["name"] == "Documents"
    assert "children" not in documents


class TestDocCommand:

    def test_invoice(self, tmp_path, capsys):
        code, out = run_cli(capsys, ["--root", str(tmp_path), "doc", "invoice",
                                     "-f", "invoiceId=INV-7", "--project-id", "12"])
        assert code == 0
        assert out.strip() == "SUCCESS:/projects/12/invoices/INV-7.pdf"

    def test_drawing_with_fields(self, tmp_path, capsys):
        code, out = run_cli(capsys, ["--root", str(tmp_path), "doc", "drawing_log",
                                     "--field", "dwgNo=R-1", "--field", "jobNo=U2524"])
        assert out.strip() == "SUCCESS:/assets/U2524/05 Approval Drawings/U2524_R-1.pdf"

    def test_stored_path(self, tmp_path, capsys):
        url = "https://drive.google.com/file/d/abc/view"
        code, out = run_cli(capsys, ["--root", str(tmp_path), "doc", "rfi", "--stored-path", url])
        assert out.strip() == f"SUCCESS:{url}"

    def test_download_mode(self, tmp_path, capsys):
        url = "https://drive.google.com/file/d/abc/view"
        code, out = run_cli(capsys, ["--root", str(tmp_path), "doc", "drawing",
                                     "--stored-path", url, "--mode", "download"])
        assert out.strip() == "SUCCESS:https://drive.google.com/uc?export=download&id=abc"

    def test_no_document(self, tmp_path, capsys):
        code, out = run_cli(capsys, ["--root", str(tmp_path), "doc", "submission"])
        assert code == 0
        assert out.strip() == "ERROR:No document available"

    def test_bad_field(self, tmp_path, capsys):
        code, out = run_cli(capsys, ["--root", str(tmp_path), "doc", "invoice", "-f", "oops"])
        assert code == 0
        assert out.strip().startswith("ERROR:Invalid field")

    def test_unknown_category_rejected_by_parser(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["doc", "blueprint"])
        assert exc.value.code == 2


@pytest.mark.parametrize("argv,expected", [
    (["job-number", "PRO 042_U2524_Valley View"], "SUCCESS:U2524"),
    (["job-number", "Quarterly report"], "ERROR:No job number found in 'Quarterly report'"),
    (["drawing-number", "sheet r12b final"], "SUCCESS:R-12B"),
    (["drawing-number", "no drawing"], "ERROR:No drawing number found in 'no drawing'"),
])
def test_identifier_commands(capsys, argv, expected):
    code, out = run_cli(capsys, argv)
    assert code == 0
    assert out.strip() == expected


def test_no_command_shows_help(capsys):
    code, out = run_cli(capsys, [])
    assert code == 1
    assert "usage" in out.lower()


def test_parse_fields():
    assert parse_fields(["a=1", " b = x=y "]) == {"a": "1", "b": "x=y"}
    assert parse_fields(None) == {}
