"""
Tests for the depositdefender-analyze CLI.
"""
import json

import pytest

from depositdefender.cli import main
from tests.conftest import make_payload


@pytest.fixture
def intake_file(tmp_path):
    path = tmp_path / "intake.json"
    path.write_text(json.dumps(make_payload(move_out_date="2024-01-30")), encoding="utf-8")
    return path


class TestAnalyzeCommand:

    def test_prints_report_and_validation(self, intake_file, capsys):
        assert main([str(intake_file), "--today", "2024-03-15"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["validation"] == {"valid": True, "errors": []}
        report = output["report"]
        assert report["timeline"]["days_since_move_out"] == 45
        assert report["case_strength"]["strategic_position"] == "STRONG"
        assert report["leverage_points"][0]["point_id"] == "deadline_missed_full_deposit"

    def test_compact_output_is_single_line(self, intake_file, capsys):
        assert main([str(intake_file), "--today", "2024-03-15", "--compact"]) == 0
        out = capsys.readouterr().out.strip()
        assert "\n" not in out
        assert json.loads(out)["report"]["report_hash"]

    def test_same_day_same_hash(self, intake_file, capsys):
        main([str(intake_file), "--today", "2024-03-15", "--compact"])
        first = json.loads(capsys.readouterr().out)["report"]["report_hash"]
        main([str(intake_file), "--today", "2024-03-15", "--compact"])
        second = json.loads(capsys.readouterr().out)["report"]["report_hash"]
        assert first == second

    def test_lease_file_counts_as_document(self, intake_file, tmp_path, capsys):
        lease = tmp_path / "lease.txt"
        lease.write_text("RESIDENTIAL LEASE AGREEMENT", encoding="utf-8")
        assert main([str(intake_file), "--today", "2024-03-15", "--lease", str(lease)]) == 0
        report = json.loads(capsys.readouterr().out)["report"]
        lease_item = next(
            i for i in report["case_strength"]["evidence_items"] if i["type"] == "lease_document"
        )
        assert lease_item["present"] is True


class TestInputErrors:

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json")]) == 1
        assert "Could not read input" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "Could not read input" in capsys.readouterr().err

    def test_non_object_intake(self, tmp_path, capsys):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "DD_INVALID_INTAKE" in capsys.readouterr().err

    def test_bad_today(self, intake_file, capsys):
        assert main([str(intake_file), "--today", "15/03/2024"]) == 1
        assert "--today" in capsys.readouterr().err

    def test_lease_not_utf8(self, intake_file, tmp_path, capsys):
        lease = tmp_path / "lease.bin"
        lease.write_bytes(b"\xff\xfe\xfa")
        assert main([str(intake_file), "--today", "2024-03-15", "--lease", str(lease)]) == 1
        assert "Could not read input" in capsys.readouterr().err

    def test_intake_not_utf8(self, tmp_path, capsys):
        path = tmp_path / "intake.json"
        path.write_bytes(b'{"notes": "\xff\xfe"}')
        assert main([str(path)]) == 1
        assert "Could not read input" in capsys.readouterr().err
