"""
Blog API: Post Service Unit Tests
====================================

What:  Tests for PostService (create, list, get, update, delete).
How:   Real queries against the per-test SQLite store; mock sessions for
       the store-failure paths.

What we test:
    ✅ Required-field validation and trimming
    ✅ Newest-first listing and case-insensitive substring search
    ✅ Missing and malformed ids both raise NotFoundError
    ✅ Update replaces fields, keeps id/created_at, advances updated_at
    ✅ SQLAlchemy errors are wrapped in DatabaseError (failed commits roll back)
"""

import asyncio
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from blog_api.exceptions import DatabaseError, NotFoundError, ValidationError
from blog_api.schemas.post import PostPayload
from blog_api.services.post_service import PostService


class TestValidatePayload:
    """Tests for required-field checks and normalization."""

    def test_trims_title_and_category(self):
        fields = PostService.validate_payload(
            PostPayload(title="  Hello  ", content=" body ", category=" News ")
        )
        assert fields["title"] == "Hello"
        assert fields["category"] == "News"
        # content is stored verbatim
        assert fields["content"] == " body "

    def test_tags_default_to_empty_list(self):
        fields = PostService.validate_payload(
            PostPayload(title="t", content="c", category="k")
        )
        assert fields["tags"] == []

    @pytest.mark.parametrize("missing", ["title", "content", "category"])
    def test_missing_required_field(self, missing):
        data = {"title": "t", "content": "c", "category": "k"}
        del data[missing]
        with pytest.raises(ValidationError) as exc_info:
            PostService.validate_payload(PostPayload(**data))
        assert exc_info.value.fields == [missing]

    def test_whitespace_only_title_rejected(self):
        with pytest.raises(ValidationError, match="title, content, and category"):
            PostService.validate_payload(PostPayload(title="   ", content="c", category="k"))

    def test_empty_content_rejected(self):
        with pytest.raises(ValidationError):
            PostService.validate_payload(PostPayload(title="t", content="", category="k"))


class TestPostServiceCrud:
    """Lifecycle tests against the ephemeral store."""

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_create_then_get(self, db_session, sample_post_data):
        created = await self.service.create_post(db_session, PostPayload(**sample_post_data))

        assert created.id is not None
        assert created.created_at is not None
        assert created.updated_at is not None
        assert created.tags == ["test", "api"]

        fetched = await self.service.get_post(db_session, str(created.id))
        assert fetched.id == created.id
        assert fetched.title == sample_post_data["title"]
        assert fetched.content == sample_post_data["content"]
        assert fetched.category == sample_post_data["category"]
        assert fetched.tags == sample_post_data["tags"]

    @pytest.mark.asyncio
    async def test_list_newest_first(self, db_session, sample_post_data):
        first = await self.service.create_post(db_session, PostPayload(**sample_post_data))
        await asyncio.sleep(0.01)
        second = await self.service.create_post(
            db_session, PostPayload(**{**sample_post_data, "title": "Another Test Post"})
        )

        posts = await self.service.list_posts(db_session)

        assert [p.id for p in posts] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_list_empty_store(self, db_session):
        assert await self.service.list_posts(db_session) == []
        assert await self.service.list_posts(db_session, term="anything") == []

    @pytest.mark.asyncio
    async def test_search_matches_any_field_case_insensitively(self, db_session):
        await self.service.create_post(
            db_session, PostPayload(title="Test Post", content="plain", category="Testing")
        )
        by_title = await self.service.create_post(
            db_session, PostPayload(title="Programming Blog", content="x", category="Dev")
        )
        by_content = await self.service.create_post(
            db_session, PostPayload(title="Notes", content="I like PROGRAMMING", category="Misc")
        )
        by_category = await self.service.create_post(
            db_session, PostPayload(title="Tips", content="y", category="programming-101")
        )

        results = await self.service.list_posts(db_session, term="programming")

        assert {p.id for p in results} == {by_title.id, by_content.id, by_category.id}

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, db_session):
        literal = await self.service.create_post(
            db_session, PostPayload(title="100% sure", content="c", category="k")
        )
        await self.service.create_post(
            db_session, PostPayload(title="1000 sure", content="c", category="k")
        )

        results = await self.service.list_posts(db_session, term="0%")

        assert [p.id for p in results] == [literal.id]

    @pytest.mark.asyncio
    async def test_empty_term_lists_everything(self, db_session, sample_post_data):
        await self.service.create_post(db_session, PostPayload(**sample_post_data))
        assert len(await self.service.list_posts(db_session, term="")) == 1

    @pytest.mark.asyncio
    async def test_update_replaces_fields(self, db_session, sample_post_data):
        created = await self.service.create_post(db_session, PostPayload(**sample_post_data))
        await asyncio.sleep(0.01)

        updated = await self.service.update_post(
            db_session,
            str(created.id),
            PostPayload(title="Updated Title", content="New body", category="Other"),
        )

        assert updated.id == created.id
        assert updated.title == "Updated Title"
        assert updated.content == "New body"
        assert updated.category == "Other"
        assert updated.tags == []  # replaced wholesale, not merged
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

    @pytest.mark.asyncio
    async def test_update_validates_before_lookup(self, db_session):
        with pytest.raises(ValidationError):
            await self.service.update_post(db_session, str(uuid4()), PostPayload(title="only"))

    @pytest.mark.asyncio
    async def test_delete_then_get_raises_not_found(self, db_session, sample_post_data):
        created = await self.service.create_post(db_session, PostPayload(**sample_post_data))

        await self.service.delete_post(db_session, str(created.id))

        with pytest.raises(NotFoundError):
            await self.service.get_post(db_session, str(created.id))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("post_id", [str(uuid4()), "not-a-valid-id", "12345"])
    async def test_unknown_and_malformed_ids_not_found(self, db_session, sample_post_data, post_id):
        payload = PostPayload(**sample_post_data)
        with pytest.raises(NotFoundError, match="Post not found"):
            await self.service.get_post(db_session, post_id)
        with pytest.raises(NotFoundError, match="Post not found"):
            await self.service.update_post(db_session, post_id, payload)
        with pytest.raises(NotFoundError, match="Post not found"):
            await self.service.delete_post(db_session, post_id)


class TestPostServiceStoreFailures:
    """Driver errors surface as DatabaseError; malformed ids never reach the store."""

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_malformed_id_skips_query(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_post(mock_db_session, "abc")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_wraps_operational_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )
        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_posts(mock_db_session)
        assert exc_info.value.context["error_type"] == "OperationalError"

    @pytest.mark.asyncio
    async def test_create_wraps_commit_error(self, mock_db_session, sample_post_data):
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk full"))
        )
        with pytest.raises(DatabaseError):
            await self.service.create_post(mock_db_session, PostPayload(**sample_post_data))
        mock_db_session.add.assert_called_once()
        mock_db_session.rollback.assert_awaited_once()

