"""
Integration tests for the command-line workflow.

Data folders point at tmp_path; Gemini is replaced by a fake generator.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from core.config_manager import save_domain_clauses
from core.drafting import PackingError
from main import main
from models.schemas import TenderClause, TenderStatus
from models.tender_store import find_tender


class FakeGenerator:
    def __init__(self, *args, **kwargs):
        pass

    async def generate(self, domain, key_points, outline_sections, clauses):
        return "# Tender\n## " + outline_sections[0].split("\n")[0] + " [generated by AI]"


class FailingGenerator(FakeGenerator):
    async def generate(self, domain, key_points, outline_sections, clauses):
        raise RuntimeError("quota exhausted")


@pytest.fixture(autouse=True)
def data_dir(tmp_path):
    with patch("config.settings.DATA_FOLDER", tmp_path), \
         patch("config.settings.CONFIG_OVERRIDES_FOLDER", tmp_path / "config"), \
         patch("main.setup_environment"):
        yield tmp_path


def _new_project(name="Office Desks", domain="Furniture & Fittings"):
    assert main(["new", name, "--domain", domain, "--point", "50 standing desks"]) == 0
    return find_tender(name)


def test_new_and_list_projects(capsys):
    tender = _new_project()
    assert tender.domain == "Furniture & Fittings"
    assert tender.analysis.key_points == ["50 standing desks"]
    assert tender.structure[0].startswith("1. Project Overview")

    assert main(["projects"]) == 0
    assert "Office Desks" in capsys.readouterr().out


def test_outline_delete_renumbers_and_persists():
    tender = _new_project()
    count = len(tender.structure)

    assert main(["outline", "Office Desks", "delete", "1"]) == 0

    updated = find_tender("Office Desks")
    assert len(updated.structure) == count - 1
    assert updated.structure[0].startswith("1. ")
    assert updated.structure == updated.analysis.structure
    assert updated.structure[0] == tender.structure[1].replace("2.", "1.")


def test_outline_add_and_edit():
    _new_project()
    assert main(["outline", "Office Desks", "add", "--text", "9. Warranty"]) == 0
    sections = find_tender("Office Desks").structure
    assert sections[-1] == f"{len(sections)}. Warranty"

    assert main(["outline", "Office Desks", "edit", "1", "--text", "1. Background"]) == 0
    assert find_tender("Office Desks").structure[0] == "1. Background"


def test_outline_rejects_bad_section_number(capsys):
    _new_project()
    assert main(["outline", "Office Desks", "up", "99"]) == 1
    assert "Section number" in capsys.readouterr().out


def test_unknown_project(capsys):
    assert main(["draft", "Nope"]) == 1
    assert "No saved project" in capsys.readouterr().out


def test_set_status():
    _new_project()
    assert main(["set-status", "Office Desks", "Approved"]) == 0
    assert find_tender("Office Desks").status == TenderStatus.APPROVED


def test_draft_then_export(tmp_path):
    _new_project()
    with patch("core.llm_client.GeminiDraftGenerator", FakeGenerator):
        assert main(["draft", "Office Desks"]) == 0
    draft = find_tender("Office Desks").draft_content
    assert draft.startswith("# Tender\n## 1. Project Overview")

    out = tmp_path / "out"
    assert main(["export", "Office Desks", "--format", "md", "--output-dir", str(out)]) == 0
    assert (out / "Office Desks.md").read_text(encoding="utf-8") == draft

    assert main(["export", "Office Desks", "--format", "docx", "--output-dir", str(out)]) == 0
    assert (out / "Office Desks.docx").read_bytes()[:2] == b"PK"


def test_failed_draft_is_not_saved(capsys):
    _new_project()
    with patch("core.llm_client.GeminiDraftGenerator", FailingGenerator):
        assert main(["draft", "Office Desks"]) == 1
    assert find_tender("Office Desks").draft_content is None
    assert "Draft generation failed" in capsys.readouterr().out


def test_export_without_draft(capsys):
    _new_project()
    assert main(["export", "Office Desks", "--format", "md"]) == 1
    assert "no draft" in capsys.readouterr().out


def test_docx_packing_failure_notice(tmp_path, capsys):
    _new_project()
    with patch("core.llm_client.GeminiDraftGenerator", FakeGenerator):
        main(["draft", "Office Desks"])

    with patch("core.export.DocxPacker.render", side_effect=PackingError("broken")):
        code = main(["export", "Office Desks", "--output-dir", str(tmp_path / "out")])
    assert code == 1
    assert "Failed to generate Word document." in capsys.readouterr().out


def test_clauses_listing_and_reset(capsys):
    assert main(["clauses", "Medical Equipment"]) == 0
    out = capsys.readouterr().out
    assert "[MED-01]" in out
    assert "[GEN-02]" in out
    assert main(["clauses", "--reset"]) == 0


def test_clauses_mandatory_only(data_dir, capsys):
    save_domain_clauses(
        "Medical Equipment",
        [
            TenderClause(id="MED-01", title="Regulatory Certification"),
            TenderClause(id="MED-09", title="Extended Training", mandatory=False),
        ],
        base_dir=data_dir,
    )
    assert main(["clauses", "Medical Equipment", "--mandatory"]) == 0
    out = capsys.readouterr().out
    assert "[MED-01]" in out
    assert "[MED-09]" not in out


@pytest.mark.parametrize(
    "argv,message",
    [
        (["outline", "Office Desks", "delete", "1"], "Failed to save the outline"),
        (["set-status", "Office Desks", "Approved"], "Failed to save the new status"),
    ],
)
def test_write_failure_is_reported(argv, message, capsys):
    before = _new_project()
    with patch("models.tender_store._write_tenders", side_effect=OSError("read-only filesystem")):
        assert main(argv) == 1
    assert message in capsys.readouterr().out
    assert find_tender("Office Desks") == before


def test_draft_save_failure_is_reported(capsys):
    _new_project()
    with patch("core.llm_client.GeminiDraftGenerator", FakeGenerator), \
         patch("main.save_tender", return_value=[]):
        assert main(["draft", "Office Desks"]) == 1
    out = capsys.readouterr().out
    assert "could not be saved" in out
    assert "# Tender" not in out
    assert find_tender("Office Desks").draft_content is None
