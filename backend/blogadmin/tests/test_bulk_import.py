"""Tests for idempotent bulk import keyed by import_hash."""

import pytest
from sqlalchemy import func, select

from blogadmin.errors import NotFoundError
from blogadmin.models import Category
from blogadmin.services.articles_service import ArticlesService
from blogadmin.services.categories_service import CategoriesService


@pytest.fixture
def service(db_session):
    return CategoriesService(db_session)


def _category_count(db_session):
    return db_session.scalar(select(func.count()).select_from(Category))


class TestBulkImport:

    def test_creates_rows(self, service, db_session, admin_actor):
        result = service.bulk_import(
            [{"name": "News", "import_hash": "n"}, {"name": "Guides", "import_hash": "g"}],
            admin_actor,
        )

        assert result == {"created": 2, "skipped": 0}
        assert _category_count(db_session) == 2

    def test_rerun_skips_existing_hashes(self, service, db_session):
        rows = [{"name": "News", "import_hash": "n"}, {"name": "Guides", "import_hash": "g"}]
        service.bulk_import(rows)

        assert service.bulk_import(rows) == {"created": 0, "skipped": 2}
        assert _category_count(db_session) == 2

    def test_duplicate_hash_within_batch(self, service):
        rows = [{"name": "A", "import_hash": "same"}, {"name": "B", "import_hash": "same"}]

        assert service.bulk_import(rows) == {"created": 1, "skipped": 1}

    def test_rows_without_hash_always_created(self, service):
        rows = [{"name": "A"}, {"name": "A"}]

        assert service.bulk_import(rows) == {"created": 2, "skipped": 0}

    def test_soft_deleted_hash_still_skipped(self, service, admin_actor):
        service.bulk_import([{"name": "Old", "import_hash": "old"}])
        (old,) = service.find_all()["rows"]
        service.remove(old["id"], admin_actor)

        assert service.bulk_import([{"name": "Old", "import_hash": "old"}]) == {"created": 0, "skipped": 1}

    def test_failure_imports_nothing(self, db_session, make_tag):
        articles = ArticlesService(db_session)
        tag = make_tag("ok")

        with pytest.raises(NotFoundError):
            articles.bulk_import([
                {"title": "good", "tags": [tag.id], "import_hash": "a1"},
                {"title": "bad", "tags": ["99999999-9999-4999-8999-999999999999"], "import_hash": "a2"},
            ])

        assert articles.find_all()["count"] == 0
