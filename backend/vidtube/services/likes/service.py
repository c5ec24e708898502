"""LikeService: toggle likes on videos, comments and tweets."""

from __future__ import annotations

from dataclasses import dataclass

from vidtube.models.like import Like
from vidtube.services._shared.base import BaseService
from vidtube.services._shared.converters import to_video_out
from vidtube.services._shared.dto import VideoOut
from vidtube.services._shared.errors import NotFoundError


@dataclass(frozen=True, slots=True)
class LikeToggleOut:
    """:param is_liked: State after the toggle."""

    is_liked: bool


# target -> (uow repository attribute, label used in messages)
LIKE_TARGETS = {
    "video": ("videos", "Video"),
    "comment": ("comments", "Comment"),
    "tweet": ("tweets", "Tweet"),
}


class LikeService(BaseService):
    """Each toggle is an involution: calling it twice restores the state."""

    def toggle_video_like(self, video_id: int) -> LikeToggleOut:
        return self.toggle("video", video_id)

    def toggle_comment_like(self, comment_id: int) -> LikeToggleOut:
        return self.toggle("comment", comment_id)

    def toggle_tweet_like(self, tweet_id: int) -> LikeToggleOut:
        return self.toggle("tweet", tweet_id)

    def toggle(self, target: str, target_id: int) -> LikeToggleOut:
        """
        Like the target, or remove the caller's existing like.

        :param target: ``"video"``, ``"comment"`` or ``"tweet"``.
        :param target_id: Target primary key.
        :raises NotFoundError: Unknown target.
        """
        repo_attr, label = LIKE_TARGETS[target]
        actor_id = self.require_actor()
        with self.rw_uow() as uow:
            if getattr(uow, repo_attr).get(target_id) is None:
                raise NotFoundError(label, target_id, detail=f"{label} not found")
            existing = uow.likes.find_for(actor_id, target, target_id)
            if existing is not None:
                uow.likes.delete(existing)
                return LikeToggleOut(is_liked=False)
            uow.likes.add(Like(liked_by_id=actor_id, **{f"{target}_id": target_id}))
            return LikeToggleOut(is_liked=True)

    def list_liked_videos(self) -> list[VideoOut]:
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            return [to_video_out(v) for v in uow.likes.liked_videos(actor_id)]
