"""
Tests for entities and value objects.
"""
from datetime import datetime, timezone

import pytest

from app.domain.entities import Article, ArticleData, Domain, DomainData, ProjectData
from app.domain.value_objects import (
    UNSET,
    ArticlePatch,
    DomainPatch,
    ProjectPatch,
    matches_query,
    new_entity_id,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_article_data_defaults():
    data = ArticleData(title="T", content="C", domain_id="ai-ml")

    assert data.status == "draft"
    assert data.excerpt is None
    assert data.tags == ()
    assert data.attachments == ()


def test_sequences_become_tuples():
    article = Article(
        id="a1", created_at=NOW, updated_at=NOW,
        title="T", content="C", domain_id="ai-ml", tags=["x", "y"],
    )

    assert article.tags == ("x", "y")


def test_invalid_article_status_raises():
    with pytest.raises(ValueError, match="Invalid status"):
        ArticleData(title="T", content="C", domain_id="ai-ml", status="archived")


def test_project_rejects_published_status():
    """'published' is an article status only"""
    with pytest.raises(ValueError):
        ProjectData(title="T", description="D", domain_id="ai-ml", status="published")


@pytest.mark.parametrize("progress", [-1, 101])
def test_domain_progress_out_of_range_raises(progress):
    with pytest.raises(ValueError, match="progress"):
        DomainData(name="N", description="D", icon="i", color="c", progress=progress)

    with pytest.raises(ValueError):
        Domain(id="d", created_at=NOW, updated_at=NOW,
               name="N", description="D", icon="i", color="c", progress=progress)


# ============================================
# Patches
# ============================================

def test_patch_changes_only_set_fields():
    patch = ArticlePatch(title="New", tags=["a", "b"])

    assert patch.changes() == {"title": "New", "tags": ("a", "b")}
    assert not patch.is_empty


def test_patch_keeps_explicit_none():
    assert ProjectPatch(demo_url=None).changes() == {"demo_url": None}


def test_empty_patch():
    assert ArticlePatch().is_empty
    assert ArticlePatch().title is UNSET
    assert not UNSET


def test_patch_validates_values():
    with pytest.raises(ValueError):
        DomainPatch(progress=150)

    with pytest.raises(ValueError):
        ArticlePatch(status="unknown")


# ============================================
# Helpers
# ============================================

def test_new_entity_id_is_unique_uuid():
    ids = {new_entity_id() for _ in range(1000)}

    assert len(ids) == 1000
    assert all(len(i) == 36 for i in ids)


def test_matches_query():
    assert matches_query("cortex", "ARM Cortex-M")
    assert matches_query("RTOS", "title", "body", tags=["freertos"])
    assert not matches_query("zephyr", "title", None, tags=["rtos"])
    assert not matches_query("", "anything")
