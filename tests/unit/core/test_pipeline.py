"""Unit tests for core/pipeline.py"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import Session, SQLModel

from betapad.core.models import RowKind
from betapad.core.pipeline import build_view, load_view, run_export, run_import, run_parse
from betapad.crud.models import ResourceTypeEnum
from betapad.crud.resources import ResourceNotFoundError, get_by_slug, upsert_resource


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    with Session(engine) as s:
        yield s


def test_build_view(sample_content):
    view = build_view(sample_content)
    assert view.title == "Checkout flow"
    assert len(view.rows) == 7
    assert view.rows[0].kind == RowKind.category
    assert any(getattr(s, "url", None) == "https://example.com/docs" for s in view.description)


def test_build_view_empty_content():
    view = build_view(None)
    assert view.rows == []
    assert view.description == []
    assert view.title == "Testpad"


def test_run_parse(sample_file):
    assert len(run_parse(sample_file).rows) == 7


def test_run_export(sample_file, tmp_path):
    view, dest = run_export(sample_file, tmp_path / "pad.tsv")
    text = dest.read_text(encoding="utf-8")
    assert text.startswith("Step\tText\tPass\tFail\tBlocked\n1\t'Basket\t\t\t\n2\t'  Add an item")


def test_run_import_counts(session, sample_file):
    counts, changes = run_import(session, sample_file.parent)
    assert counts == {"created": 1, "updated": 0, "unchanged": 0}
    assert changes == [("created", "checkout")]
    assert get_by_slug(session, "checkout").name == "Checkout flow"

    counts, changes = run_import(session, sample_file.parent)
    assert counts["unchanged"] == 1
    assert changes == []


def test_run_import_name_override(session, sample_file):
    run_import(session, sample_file, name="Custom")
    assert get_by_slug(session, "checkout").name == "Custom"


def test_run_import_without_step_table_warns(session, tmp_path, caplog):
    f = tmp_path / "empty.csv"
    f.write_text("just, some, cells\n")
    counts, _ = run_import(session, f)
    assert counts["created"] == 1
    assert "no step table" in caplog.text


def test_run_import_same_stem_in_sibling_dirs(session, tmp_path, sample_content):
    for d in ("a", "b"):
        (tmp_path / d).mkdir()
        (tmp_path / d / "login.csv").write_text(sample_content, encoding="utf-8")
    counts, changes = run_import(session, tmp_path)
    assert counts["created"] == 2
    assert sorted(slug for _, slug in changes) == ["login", "login-2"]

    counts, _ = run_import(session, tmp_path)
    assert counts == {"created": 0, "updated": 0, "unchanged": 2}


def test_run_import_slug_taken_by_pathless_resource(session, sample_file):
    existing, _ = upsert_resource(session, "checkout", "Checkout", "x")
    counts, changes = run_import(session, sample_file)
    assert counts["created"] == 1
    assert changes == [("created", "checkout-2")]
    assert get_by_slug(session, "checkout").id == existing.id


def test_load_view_by_slug_and_type_check(session, sample_content):
    resource, _ = upsert_resource(session, "pad", "Pad", sample_content)
    assert load_view(session, "pad").resource.id == resource.id
    assert len(load_view(session, resource.id).rows) == 7

    upsert_resource(session, "doc", "Doc", "# md", type=ResourceTypeEnum.markdown)
    with pytest.raises(ValueError, match="not a testpad"):
        load_view(session, "doc")
    with pytest.raises(ResourceNotFoundError):
        load_view(session, "missing")
