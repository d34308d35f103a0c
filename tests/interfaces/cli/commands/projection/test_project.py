"""project コマンドのテスト."""

import json

from pathlib import Path

import pytest

from click.testing import CliRunner

from src.interfaces.cli.commands.projection.project import project


@pytest.fixture()
def snapshot_files(tmp_path: Path) -> dict[str, Path]:
    reference = tmp_path / "reference.json"
    reference.write_text(
        json.dumps(
            {
                "chamber_size": 7,
                "barrier_percent": 5,
                "regions": [
                    {
                        "region": "N",
                        "proportional_seats": 4,
                        "previous_seats": {"A": 1, "B": 3},
                        "previous_percentages": {"A": 30.0, "B": 70.0},
                    }
                ],
                "districts": [
                    {
                        "district_id": "d1",
                        "region": "N",
                        "registered_voters": 1000,
                        "previous_holder": "B",
                    },
                    {"district_id": "d2", "region": "N"},
                    {
                        "district_id": "d3",
                        "region": "N",
                        "registered_voters": 2000,
                    },
                ],
            }
        ),
        encoding="utf-8",
    )
    proportional = tmp_path / "pr.csv"
    proportional.write_text(
        "region,list_identifier,votes\nN,A,100.000\nN,B,80.000\nN,C,30.000\n",
        encoding="utf-8",
    )
    districts = tmp_path / "d.csv"
    districts.write_text(
        "district_id,candidate_name,list_identifier,votes\n"
        "d1,山田太郎,A,700\n"
        "d1,鈴木花子,B,200\n"
        "d2,佐藤次郎,B,50\n"
        "d3,田中一郎,A,450\n"
        "d3,高橋二郎,C,440\n",
        encoding="utf-8",
    )
    return {
        "reference": reference,
        "proportional": proportional,
        "districts": districts,
    }


def _args(files: dict[str, Path], *extra: str) -> list[str]:
    return [
        "--reference",
        str(files["reference"]),
        "--proportional",
        str(files["proportional"]),
        "--districts",
        str(files["districts"]),
        *extra,
    ]


class TestProjectCommand:
    def test_json_output(self, snapshot_files) -> None:
        runner = CliRunner()
        result = runner.invoke(
            project, _args(snapshot_files, "--json", "--coalition", "A,C")
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)

        assert data["national"]["seats"] == {"A": 3, "B": 3, "C": 0}
        assert data["national"]["total"] == 6
        assert data["national"]["majority_threshold"] == 4
        assert data["regions"]["N"]["seats"] == {"A": 2, "B": 2}
        assert data["regions"]["N"]["chamber"] == {"A": 3, "B": 3}
        assert data["districts"]["d1"]["status"] == "gained"
        assert data["districts"]["d1"]["candidates"][0]["status"] == "elected"
        assert data["districts"]["d1"]["candidates"][1]["status"] == "processing"
        assert data["districts"]["d2"]["status"] == "elected"
        assert data["districts"]["d3"]["status"] == "leading"
        assert data["districts"]["d3"]["is_final"] is False
        assert data["districts"]["d3"]["candidates"][0]["status"] == "leading"
        assert data["seat_changes"]["A"] == {
            "held": 0,
            "gained": 1,
            "lost": 0,
            "net": 1,
        }
        assert data["seat_changes"]["B"]["lost"] == 1
        assert data["coalitions"] == [
            {"members": ["A", "C"], "seats": 3, "has_majority": False}
        ]
        assert data["warnings"] == [
            "議席合計 6 が定数 7 と一致しません",
        ]

    def test_table_output(self, snapshot_files) -> None:
        runner = CliRunner()
        result = runner.invoke(project, _args(snapshot_files))

        assert result.exit_code == 0, result.output
        assert "=== 全国議席 ===" in result.output
        assert "合計: 6 / 定数 7" in result.output
        assert "2/3 確定" in result.output
        assert "gained" in result.output
        assert "前回比" in result.output

    def test_reference_only(self, snapshot_files) -> None:
        runner = CliRunner()
        result = runner.invoke(
            project, ["--reference", str(snapshot_files["reference"]), "--json"]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["regions"]["N"]["unallocated"] == 4
        assert {d["status"] for d in data["districts"].values()} == {"awaiting_data"}

    def test_invalid_reference_exits_with_error(self, tmp_path) -> None:
        reference = tmp_path / "reference.json"
        reference.write_text('{"chamber_size": -1}', encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(project, ["--reference", str(reference)])

        assert result.exit_code == 1
        assert "選挙参照データ" in result.output

    def test_missing_reference_file(self, tmp_path) -> None:
        runner = CliRunner()
        result = runner.invoke(
            project, ["--reference", str(tmp_path / "missing.json")]
        )

        assert result.exit_code == 2
