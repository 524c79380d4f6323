"""Unit tests for CommentService."""

import asyncio
from uuid import uuid4

import pytest

from remarks.domain.error import NotFoundError, ValidationError
from remarks.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
)
from remarks.domain.service import CommentService
from remarks.domain.value import (
    CommentCategory,
    CommentFilter,
    CommentId,
    PostId,
    TargetId,
    UserId,
)
from tests.conftest import at, make_comment, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_top_level_comment(self, unit_env):
        """A top-level comment's path is its own id."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user = await (await unit_env.get(UserRepository)).save(make_user())
        target_id = TargetId(uuid4())

        # Act
        result = await comment_service.create_comment(
            body="First!",
            category=CommentCategory.MANGA,
            target_id=target_id,
            user_id=user.id,
        )

        # Assert
        assert result.path == str(result.id)
        assert result.parent_id is None
        assert result.depth == 0
        assert result.target_id == target_id
        assert result.post_id is None
        assert result.user == user
        assert result.post is None
        stored = await comment_repo.find_by_id(result.id)
        assert stored.path == result.path
        assert stored.user is None

    @pytest.mark.asyncio
    async def test_reply_extends_parent_path(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await (await unit_env.get(UserRepository)).save(make_user())
        target_id = TargetId(uuid4())
        root = await comment_service.create_comment(
            body="Root", category=CommentCategory.NOVEL, target_id=target_id, user_id=user.id
        )

        # Act
        reply = await comment_service.create_comment(
            body="Reply",
            category=CommentCategory.NOVEL,
            target_id=target_id,
            user_id=user.id,
            parent_id=root.id,
        )
        nested = await comment_service.create_comment(
            body="Nested",
            category=CommentCategory.NOVEL,
            target_id=target_id,
            user_id=user.id,
            parent_id=reply.id,
        )

        # Assert
        assert reply.path == f"{root.path}/{reply.id}"
        assert reply.parent_id == root.id
        assert nested.path == f"{root.id}/{reply.id}/{nested.id}"
        assert nested.depth == 2

    @pytest.mark.asyncio
    async def test_post_comment_references_existing_post(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await (await unit_env.get(UserRepository)).save(make_user())
        post = await (await unit_env.get(PostRepository)).save(make_post())

        # Act
        result = await comment_service.create_comment(
            body="On a post",
            category=CommentCategory.POST,
            target_id=TargetId(post.id),
            user_id=user.id,
            post_id=post.id,
        )

        # Assert
        assert result.post_id == post.id
        assert result.category == CommentCategory.POST
        assert result.post == post
        assert result.user == user

    @pytest.mark.asyncio
    async def test_post_comment_without_post_id_raises(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        user = await (await unit_env.get(UserRepository)).save(make_user())

        with pytest.raises(ValidationError, match="require a post_id"):
            await comment_service.create_comment(
                body="Where is the post?",
                category=CommentCategory.POST,
                target_id=TargetId(uuid4()),
                user_id=user.id,
                post_id=None,
            )

    @pytest.mark.asyncio
    async def test_post_comment_target_may_differ_from_post(self, unit_env):
        """The post reference is kept as given, whatever the target id."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await (await unit_env.get(UserRepository)).save(make_user())
        post = await (await unit_env.get(PostRepository)).save(make_post())
        target_id = TargetId(uuid4())

        # Act
        result = await comment_service.create_comment(
            body="Different target",
            category=CommentCategory.POST,
            target_id=target_id,
            user_id=user.id,
            post_id=post.id,
        )

        # Assert
        assert result.post_id == post.id
        assert result.target_id == target_id

    @pytest.mark.asyncio
    async def test_non_post_comment_with_post_id_raises(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        user = await (await unit_env.get(UserRepository)).save(make_user())

        with pytest.raises(ValidationError, match="cannot reference a post"):
            await comment_service.create_comment(
                body="Chapter comment",
                category=CommentCategory.CHAPTER,
                target_id=TargetId(uuid4()),
                user_id=user.id,
                post_id=PostId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        user = await (await unit_env.get(UserRepository)).save(make_user())
        post_id = PostId(uuid4())

        with pytest.raises(NotFoundError) as exc_info:
            await comment_service.create_comment(
                body="Ghost post",
                category=CommentCategory.POST,
                target_id=TargetId(post_id),
                user_id=user.id,
                post_id=post_id,
            )
        assert exc_info.value.resource == "Post"

    @pytest.mark.asyncio
    async def test_missing_user_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError) as exc_info:
            await comment_service.create_comment(
                body="Who am I",
                category=CommentCategory.MANGA,
                target_id=TargetId(uuid4()),
                user_id=UserId(uuid4()),
            )
        assert exc_info.value.resource == "User"

    @pytest.mark.asyncio
    async def test_missing_parent_raises_not_found(self, unit_env):
        """Replying to a comment that does not exist fails and stores nothing."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user = await (await unit_env.get(UserRepository)).save(make_user())
        parent_id = CommentId(uuid4())

        # Act & Assert
        with pytest.raises(NotFoundError) as exc_info:
            await comment_service.create_comment(
                body="Reply to nothing",
                category=CommentCategory.MANGA,
                target_id=TargetId(uuid4()),
                user_id=user.id,
                parent_id=parent_id,
            )
        assert exc_info.value.identifiers == [str(parent_id)]
        assert await comment_repo.find_roots(CommentFilter()) == []

    @pytest.mark.asyncio
    async def test_reply_may_use_other_category_and_target(self, unit_env):
        """Only the parent's existence is checked for replies."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await (await unit_env.get(UserRepository)).save(make_user())
        target_id = TargetId(uuid4())
        root = await comment_service.create_comment(
            body="Root", category=CommentCategory.MANGA, target_id=target_id, user_id=user.id
        )
        reply_target = TargetId(uuid4())

        # Act
        reply = await comment_service.create_comment(
            body="Chapter-level reply",
            category=CommentCategory.NOVEL,
            target_id=reply_target,
            user_id=user.id,
            parent_id=root.id,
        )

        # Assert
        assert reply.parent_id == root.id
        assert reply.category == CommentCategory.NOVEL
        assert reply.target_id == reply_target
        trees = await comment_service.get_trees(
            CommentFilter(category=CommentCategory.MANGA, target_id=target_id)
        )
        assert [child.comment.id for child in trees[0].children] == [reply.id]

    @pytest.mark.asyncio
    async def test_empty_body_raises(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        user = await (await unit_env.get(UserRepository)).save(make_user())

        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                body="",
                category=CommentCategory.MANGA,
                target_id=TargetId(uuid4()),
                user_id=user.id,
            )


class TestGetTrees:
    """Tests for get_trees method."""

    @pytest.mark.asyncio
    async def test_trees_follow_root_order_with_nested_replies(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        target_id = TargetId(uuid4())
        r2 = make_comment(target_id=target_id, created_at=at(5))
        r1 = make_comment(target_id=target_id, created_at=at(0))
        c1 = make_comment(parent=r1, created_at=at(1))
        g1 = make_comment(parent=c1, created_at=at(2))
        for comment in (r2, g1, r1, c1):
            await comment_repo.save(comment)

        # Act
        trees = await comment_service.get_trees(CommentFilter(target_id=target_id))

        # Assert
        assert [tree.comment.id for tree in trees] == [r1.id, r2.id]
        assert [child.comment.id for child in trees[0].children] == [c1.id]
        assert [g.comment.id for g in trees[0].children[0].children] == [g1.id]
        assert trees[1].children == []

    @pytest.mark.asyncio
    async def test_filter_applies_to_roots_only(self, unit_env):
        """Replies by other users still appear under a matching root."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = UserId(uuid4())
        root = make_comment(user_id=author, created_at=at(0))
        reply = make_comment(parent=root, user_id=UserId(uuid4()), created_at=at(1))
        other_root = make_comment(created_at=at(2))
        for comment in (root, reply, other_root):
            await comment_repo.save(comment)

        # Act
        trees = await comment_service.get_trees(CommentFilter(user_id=author))

        # Assert
        assert len(trees) == 1
        assert trees[0].comment.id == root.id
        assert [child.comment.id for child in trees[0].children] == [reply.id]

    @pytest.mark.asyncio
    async def test_filter_by_category(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        manga = make_comment(category=CommentCategory.MANGA)
        novel = make_comment(category=CommentCategory.NOVEL)
        await comment_repo.save(manga)
        await comment_repo.save(novel)

        trees = await comment_service.get_trees(
            CommentFilter(category=CommentCategory.NOVEL)
        )

        assert [tree.comment.id for tree in trees] == [novel.id]

    @pytest.mark.asyncio
    async def test_descendants_kept_whatever_their_category(self, unit_env):
        """Replies on other content still hang under a matching root."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        target_id = TargetId(uuid4())
        root = make_comment(
            category=CommentCategory.MANGA, target_id=target_id, created_at=at(0)
        )
        novel_reply = make_comment(
            parent=root, category=CommentCategory.NOVEL, created_at=at(1)
        )
        chapter_reply = make_comment(
            parent=novel_reply,
            category=CommentCategory.CHAPTER,
            target_id=TargetId(uuid4()),
            created_at=at(2),
        )
        for comment in (root, novel_reply, chapter_reply):
            await comment_repo.save(comment)

        # Act
        trees = await comment_service.get_trees(
            CommentFilter(category=CommentCategory.MANGA, target_id=target_id)
        )

        # Assert
        assert len(trees) == 1
        assert trees[0].size() == 3
        child = trees[0].children[0]
        assert child.comment.id == novel_reply.id
        assert child.comment.category == CommentCategory.NOVEL
        assert child.children[0].comment.id == chapter_reply.id

    @pytest.mark.asyncio
    async def test_no_matching_roots(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        trees = await comment_service.get_trees(CommentFilter(target_id=TargetId(uuid4())))

        assert trees == []


class TestPaginate:
    """Tests for paginate method."""

    async def _seed(self, unit_env):
        """R1 -> C1, C2 ; R2."""
        comment_repo = await unit_env.get(CommentRepository)
        target_id = TargetId(uuid4())
        r1 = make_comment(target_id=target_id, created_at=at(0))
        c1 = make_comment(parent=r1, created_at=at(1))
        c2 = make_comment(parent=r1, created_at=at(2))
        r2 = make_comment(target_id=target_id, created_at=at(3))
        for comment in (c2, r2, c1, r1):
            await comment_repo.save(comment)
        return target_id, (r1, c1, c2, r2)

    @pytest.mark.asyncio
    async def test_pages_split_threads(self, unit_env):
        """Page boundaries may fall inside a thread."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        target_id, (r1, c1, c2, r2) = await self._seed(unit_env)
        comment_filter = CommentFilter(target_id=target_id)

        # Act
        first = await comment_service.paginate(comment_filter, page=1, page_size=2)
        second = await comment_service.paginate(comment_filter, page=2, page_size=2)

        # Assert
        assert [item.comment.id for item in first.items] == [r1.id, c1.id]
        assert [item.depth for item in first.items] == [0, 1]
        assert [item.comment.id for item in second.items] == [c2.id, r2.id]
        assert [item.depth for item in second.items] == [1, 0]
        assert first.total == second.total == 4
        assert first.total_pages == 2

    @pytest.mark.asyncio
    async def test_pages_include_replies_on_other_content(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        target_id = TargetId(uuid4())
        root = make_comment(
            category=CommentCategory.NOVEL, target_id=target_id, created_at=at(0)
        )
        reply = make_comment(
            parent=root,
            category=CommentCategory.CHAPTER,
            target_id=TargetId(uuid4()),
            created_at=at(1),
        )
        await comment_repo.save(root)
        await comment_repo.save(reply)

        # Act
        result = await comment_service.paginate(
            CommentFilter(category=CommentCategory.NOVEL, target_id=target_id),
            page=1,
            page_size=10,
        )

        # Assert
        assert [item.comment.id for item in result.items] == [root.id, reply.id]
        assert [item.depth for item in result.items] == [0, 1]
        assert result.total == 2

    @pytest.mark.asyncio
    async def test_page_past_end_is_empty(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        target_id, _ = await self._seed(unit_env)

        result = await comment_service.paginate(
            CommentFilter(target_id=target_id), page=3, page_size=2
        )

        assert result.items == []
        assert result.total == 4
        assert result.page == 3

    @pytest.mark.asyncio
    async def test_total_reflects_new_comments(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        target_id, (r1, *_rest) = await self._seed(unit_env)
        comment_filter = CommentFilter(target_id=target_id)

        before = await comment_service.paginate(comment_filter, page=1, page_size=10)
        await comment_repo.save(make_comment(parent=r1, created_at=at(9)))
        after = await comment_service.paginate(comment_filter, page=1, page_size=10)

        assert before.total == 4
        assert after.total == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page,page_size", [(0, 10), (-1, 10), (1, 0)])
    async def test_invalid_page_raises(self, unit_env, page, page_size):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError):
            await comment_service.paginate(CommentFilter(), page=page, page_size=page_size)


class TestDeleteComments:
    """Tests for delete_comments method."""

    @pytest.mark.asyncio
    async def test_delete_removes_whole_subtree(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        root = make_comment(created_at=at(0))
        child = make_comment(parent=root, created_at=at(1))
        grandchild = make_comment(parent=child, created_at=at(2))
        sibling = make_comment(parent=root, created_at=at(3))
        for comment in (root, child, grandchild, sibling):
            await comment_repo.save(comment)

        # Act
        removed = await comment_service.delete_comments([child.id])

        # Assert
        assert removed == 2
        assert await comment_repo.find_by_id(child.id) is None
        assert await comment_repo.find_by_id(grandchild.id) is None
        assert await comment_repo.find_by_id(root.id) == root
        assert await comment_repo.find_by_id(sibling.id) == sibling

    @pytest.mark.asyncio
    async def test_missing_ids_are_all_reported(self, unit_env):
        """Nothing is deleted when any id is missing."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        existing = make_comment()
        await comment_repo.save(existing)
        missing_a, missing_b = CommentId(uuid4()), CommentId(uuid4())

        # Act & Assert
        with pytest.raises(NotFoundError) as exc_info:
            await comment_service.delete_comments([missing_a, existing.id, missing_b])

        assert exc_info.value.identifiers == [str(missing_a), str(missing_b)]
        assert await comment_repo.find_by_id(existing.id) == existing

    @pytest.mark.asyncio
    async def test_overlapping_ids_count_each_row_once(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        root = make_comment()
        child = make_comment(parent=root)
        await comment_repo.save(root)
        await comment_repo.save(child)

        removed = await comment_service.delete_comments([child.id, root.id, root.id])

        assert removed == 2

    @pytest.mark.asyncio
    async def test_empty_input_deletes_nothing(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        assert await comment_service.delete_comments([]) == 0

    @pytest.mark.asyncio
    async def test_concurrent_reply_and_delete_leave_no_orphan(self, unit_env):
        """Either the reply fails or it is deleted with its parent."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user = await (await unit_env.get(UserRepository)).save(make_user())
        target_id = TargetId(uuid4())
        root = await comment_service.create_comment(
            body="Root", category=CommentCategory.MANGA, target_id=target_id, user_id=user.id
        )

        # Act
        reply_result, _ = await asyncio.gather(
            comment_service.create_comment(
                body="Racing reply",
                category=CommentCategory.MANGA,
                target_id=target_id,
                user_id=user.id,
                parent_id=root.id,
            ),
            comment_service.delete_comments([root.id]),
            return_exceptions=True,
        )

        # Assert
        assert await comment_repo.find_by_id(root.id) is None
        if isinstance(reply_result, BaseException):
            assert isinstance(reply_result, NotFoundError)
        else:
            assert await comment_repo.find_by_id(reply_result.id) is None


class TestGetComment:
    """Tests for get_comment method."""

    @pytest.mark.asyncio
    async def test_get_existing_comment(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())

        assert await comment_service.get_comment(comment.id) == comment

    @pytest.mark.asyncio
    async def test_get_missing_comment_raises(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError, match="Comment not found"):
            await comment_service.get_comment(CommentId(uuid4()))
