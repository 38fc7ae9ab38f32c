"""
Tests for ArticlesRepository.

Covers list queries (filters, pagination, ordering, soft-delete scope,
counts), single-record hydration and relation replacement. Mutations are
committed explicitly here; the service tests cover transaction handling.
"""

import pytest
from sqlalchemy import func, select

from blogadmin.errors import NotFoundError, ValidationError
from blogadmin.models import Article, File, articles_tags
from blogadmin.repositories.articles_repo import ArticlesRepository


MISSING_ID = "99999999-9999-4999-8999-999999999999"


@pytest.fixture
def repo(db_session):
    return ArticlesRepository(db_session)


@pytest.fixture
def author(make_user):
    return make_user("ada@example.com")


@pytest.fixture
def other_author(make_user):
    return make_user("grace@example.com", first_name="Grace", last_name="Hopper")


@pytest.fixture
def create(repo, db_session, admin_actor):
    def _create(data):
        record = repo.create(data, admin_actor)
        db_session.commit()
        return record
    return _create


# =============================================================================
# Create / find_by
# =============================================================================

class TestCreate:

    def test_scalars_and_defaults(self, create, repo):
        record = create({"title": "Hello"})

        found = repo.find_by({"id": record.id})
        assert found["title"] == "Hello"
        assert found["body"] is None
        assert found["featured"] is False

    def test_links_to_deleted_tags_dropped(self, create, repo, db_session, make_tag):
        t1, t2 = make_tag("t1"), make_tag("t2")
        record = create({"title": "x", "tags": [t1.id, t2.id]})
        t2.soft_delete()
        db_session.commit()

        repo.update(record.id, {"title": "x", "tags": [t1.id]})
        db_session.commit()

        links = select(func.count()).select_from(articles_tags).where(articles_tags.c.article_id == record.id)
        assert db_session.scalar(links) == 1

        t2.deleted_at = None
        db_session.commit()
        assert [t["name"] for t in repo.find_by({"id": record.id})["tags"]] == ["t1"]
        assert found["created_at"] is not None

    def test_actor_attribution(self, create, admin_actor):
        record = create({"title": "Hello"})

        assert record.created_by_id == admin_actor.id
        assert record.updated_by_id == admin_actor.id
        assert record.deleted_by_id is None

    def test_explicit_id_kept(self, create):
        record_id = "3f1c2a10-8a0b-4c5e-9d3b-1f2e3d4c5b6a"

        assert create({"id": record_id, "title": "x"}).id == record_id

    def test_malformed_id_rejected(self, repo):
        with pytest.raises(ValidationError):
            repo.create({"id": "nope", "title": "x"})

    def test_relations_hydrated(self, create, repo, author, make_category, make_tag):
        news = make_category("News")
        b, a = make_tag("beta"), make_tag("alpha")

        record = create({
            "title": "Hello",
            "author": author.id,
            "category": news.id,
            "tags": [b.id, a.id],
            "images": [{"name": "cover.png", "size_in_bytes": 10, "public_url": "https://cdn/cover.png"}],
        })

        found = repo.find_by({"id": record.id})
        assert found["author"]["email"] == "ada@example.com"
        assert found["author_id"] == author.id
        assert found["category"]["name"] == "News"
        assert [t["name"] for t in found["tags"]] == ["alpha", "beta"]
        assert [f["name"] for f in found["images"]] == ["cover.png"]
        assert found["images"][0]["owner_type"] == "articles"
        assert found["images"][0]["owner_field"] == "images"

    def test_relation_accepts_object_with_id(self, create, repo, author):
        record = create({"title": "x", "author": {"id": author.id}})

        assert repo.find_by({"id": record.id})["author"]["id"] == author.id

    def test_duplicate_tag_ids_collapse(self, create, repo, make_tag):
        tag = make_tag("solo")

        record = create({"title": "x", "tags": [tag.id, tag.id]})

        assert len(repo.find_by({"id": record.id})["tags"]) == 1

    def test_unknown_author_rejected(self, repo):
        with pytest.raises(NotFoundError) as exc_info:
            repo.create({"title": "x", "author": MISSING_ID})

        assert exc_info.value.message == "usersNotFound"
        assert exc_info.value.record_id == MISSING_ID

    def test_deleted_tag_cannot_be_attached(self, repo, db_session, make_tag):
        tag = make_tag("gone")
        tag.soft_delete()
        db_session.commit()

        with pytest.raises(NotFoundError):
            repo.create({"title": "x", "tags": [tag.id]})

    def test_file_without_name_rejected(self, repo):
        with pytest.raises(ValidationError) as exc_info:
            repo.create({"title": "x", "images": [{"public_url": "https://cdn/a.png"}]})

        assert exc_info.value.message == "errors.validation.fileName"

    def test_duplicate_import_hash_rejected(self, create, repo):
        create({"title": "first", "import_hash": "dup"})

        with pytest.raises(ValidationError) as exc_info:
            repo.create({"title": "second", "import_hash": "dup"})

        assert exc_info.value.message == "errors.validation.importHash"
        assert exc_info.value.field == "import_hash"

    def test_import_hash_of_deleted_record_rejected(self, create, repo, db_session):
        record = create({"title": "first", "import_hash": "gone"})
        record.soft_delete()
        db_session.commit()

        with pytest.raises(ValidationError):
            repo.create({"title": "second", "import_hash": "gone"})


class TestFindBy:

    def test_missing_returns_none(self, repo):
        assert repo.find_by({"id": MISSING_ID}) is None

    def test_deleted_hidden_unless_requested(self, create, repo, db_session):
        record = create({"title": "x"})
        repo.remove(record.id)
        db_session.commit()

        assert repo.find_by({"id": record.id}) is None
        assert repo.find_by({"id": record.id}, include_deleted=True)["title"] == "x"

    def test_unknown_where_field(self, repo):
        with pytest.raises(ValidationError) as exc_info:
            repo.find_by({"nope": 1})

        assert exc_info.value.message == "errors.validation.whereField"

    def test_deleted_relations_hidden(self, create, repo, db_session, make_tag):
        keep, drop = make_tag("keep"), make_tag("drop")
        record = create({"title": "x", "tags": [keep.id, drop.id]})

        drop.soft_delete()
        db_session.commit()

        assert [t["name"] for t in repo.find_by({"id": record.id})["tags"]] == ["keep"]

    def test_deleted_author_hydrates_as_none(self, create, repo, db_session, author):
        record = create({"title": "x", "author": author.id})

        author.soft_delete()
        db_session.commit()

        found = repo.find_by({"id": record.id})
        assert found["author"] is None
        assert found["author_id"] == author.id


# =============================================================================
# Update / remove
# =============================================================================

class TestUpdate:

    def test_relations_replaced_wholesale(self, create, repo, db_session, author, other_author, make_tag):
        t1, t2, t3 = make_tag("t1"), make_tag("t2"), make_tag("t3")
        record = create({"title": "x", "author": author.id, "tags": [t1.id, t2.id]})

        repo.update(record.id, {"title": "y", "author": other_author.id, "tags": [t3.id]})
        db_session.commit()

        found = repo.find_by({"id": record.id})
        assert found["title"] == "y"
        assert found["author"]["email"] == "grace@example.com"
        assert [t["name"] for t in found["tags"]] == ["t3"]

    def test_omitted_relations_cleared(self, create, repo, db_session, author, make_tag):
        tag = make_tag("t1")
        record = create({"title": "x", "author": author.id, "tags": [tag.id], "featured": True})

        repo.update(record.id, {"title": "x"})
        db_session.commit()

        found = repo.find_by({"id": record.id})
        assert found["author"] is None
        assert found["tags"] == []
        assert found["featured"] is False

    def test_images_diffed(self, create, repo, db_session):
        record = create({"title": "x", "images": [{"name": "a.png"}, {"name": "b.png"}]})
        images = repo.find_by({"id": record.id})["images"]
        kept = next(i for i in images if i["name"] == "a.png")

        repo.update(record.id, {"title": "x", "images": [{"id": kept["id"], "name": "a.png"}, {"name": "c.png"}]})
        db_session.commit()

        found = repo.find_by({"id": record.id})
        assert sorted(i["name"] for i in found["images"]) == ["a.png", "c.png"]
        assert kept["id"] in {i["id"] for i in found["images"]}

        removed = db_session.query(File).filter(File.name == "b.png").one()
        assert removed.deleted_at is not None

    def test_update_missing_record(self, repo):
        with pytest.raises(NotFoundError) as exc_info:
            repo.update(MISSING_ID, {"title": "x"})

        assert exc_info.value.message == "articlesNotFound"

    def test_updated_by_stamped(self, create, repo, db_session, editor_actor):
        record = create({"title": "x"})

        repo.update(record.id, {"title": "y"}, editor_actor)
        db_session.commit()

        assert db_session.get(Article, record.id).updated_by_id == editor_actor.id


class TestRemove:

    def test_soft_delete_keeps_row(self, create, repo, db_session, admin_actor):
        record = create({"title": "x"})

        repo.remove(record.id, admin_actor)
        db_session.commit()

        row = db_session.get(Article, record.id)
        assert row is not None
        assert row.deleted_at is not None
        assert row.deleted_by_id == admin_actor.id

    def test_remove_twice_is_not_found(self, create, repo, db_session):
        record = create({"title": "x"})
        repo.remove(record.id)
        db_session.commit()

        with pytest.raises(NotFoundError):
            repo.remove(record.id)


# =============================================================================
# find_all
# =============================================================================

class TestFindAll:

    @pytest.fixture
    def seeded(self, create, set_created_at, author, other_author, make_category, make_tag):
        news = make_category("News")
        python, rust = make_tag("python"), make_tag("rust")

        rows = [
            create({"title": "Python tips", "body": "list comprehensions", "featured": True,
                    "author": author.id, "category": news.id, "tags": [python.id]}),
            create({"title": "Rust intro", "body": "ownership", "author": other_author.id,
                    "tags": [rust.id, python.id]}),
            create({"title": "Weekly news", "body": "python and rust", "category": news.id}),
        ]
        for day, record in enumerate(rows):
            set_created_at(Article, record.id, days=day)

        return {
            "rows": rows,
            "author": author,
            "other_author": other_author,
            "news": news,
            "python": python,
            "rust": rust,
        }

    @staticmethod
    def _titles(result):
        return [row["title"] for row in result["rows"]]

    def test_default_order_newest_first(self, repo, seeded):
        result = repo.find_all()

        assert self._titles(result) == ["Weekly news", "Rust intro", "Python tips"]
        assert result["count"] == 3

    def test_explicit_sort(self, repo, seeded):
        result = repo.find_all({"field": "title", "sort": "asc"})

        assert self._titles(result) == ["Python tips", "Rust intro", "Weekly news"]

    def test_pagination_keeps_total_count(self, repo, seeded):
        result = repo.find_all({"page": 1, "limit": 2})

        assert self._titles(result) == ["Python tips"]
        assert result["count"] == 3

    def test_text_filter(self, repo, seeded):
        assert self._titles(repo.find_all({"title": "RUST"})) == ["Rust intro"]

    def test_search_spans_title_and_body(self, repo, seeded):
        result = repo.find_all({"search": "python"})

        assert self._titles(result) == ["Weekly news", "Python tips"]
        assert result["count"] == 2

    def test_boolean_filter(self, repo, seeded):
        assert self._titles(repo.find_all({"featured": "true"})) == ["Python tips"]

    def test_foreign_keys_filter(self, repo, seeded):
        result = repo.find_all({"author": f"{seeded['author'].id}|{seeded['other_author'].id}"})

        assert self._titles(result) == ["Rust intro", "Python tips"]

    def test_related_ids_filter_counts_each_article_once(self, repo, seeded):
        result = repo.find_all({"tags": f"{seeded['python'].id}|{seeded['rust'].id}"})

        assert self._titles(result) == ["Rust intro", "Python tips"]
        assert result["count"] == 2

    def test_date_range(self, repo, seeded):
        result = repo.find_all({"created_at_range": ["2024-01-02", "2024-01-02T23:59:59"]})

        assert self._titles(result) == ["Rust intro"]

    def test_filters_combine_with_and(self, repo, seeded):
        result = repo.find_all({"category": seeded["news"].id, "featured": "false"})

        assert self._titles(result) == ["Weekly news"]

    def test_deleted_rows_excluded_from_rows_and_count(self, repo, db_session, seeded):
        repo.remove(seeded["rows"][0].id)
        db_session.commit()

        result = repo.find_all()
        assert "Python tips" not in self._titles(result)
        assert result["count"] == 2

    def test_rows_carry_relations(self, repo, seeded):
        row = repo.find_all({"title": "Rust"})["rows"][0]

        assert row["author"]["email"] == "grace@example.com"
        assert row["category"] is None
        assert [t["name"] for t in row["tags"]] == ["python", "rust"]
        assert row["images"] == []

    def test_deleted_tag_hidden_in_list(self, repo, db_session, seeded):
        seeded["python"].soft_delete()
        db_session.commit()

        row = repo.find_all({"title": "Rust"})["rows"][0]
        assert [t["name"] for t in row["tags"]] == ["rust"]

    def test_malformed_filter_raises(self, repo, seeded):
        with pytest.raises(ValidationError):
            repo.find_all({"tags": "python"})

    def test_list_max_limit_from_settings(self, repo, seeded, make_yaml_config, monkeypatch):
        from blogadmin.config.admin_settings import reset_admin_settings

        path = make_yaml_config("admin_settings.yml", {"list": {"max_limit": 1}})
        monkeypatch.setenv("ADMIN_SETTINGS_PATH", str(path))
        reset_admin_settings()

        result = repo.find_all({"limit": 50})
        assert len(result["rows"]) == 1
        assert result["count"] == 3
