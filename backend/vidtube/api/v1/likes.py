"""Like toggles for videos, comments and tweets."""

from __future__ import annotations

from flask import Blueprint

from vidtube.api.deps import api_response, require_auth, timing
from vidtube.schemas import LikeToggleSchema, VideoSchema
from vidtube.services.auth import AuthContext
from vidtube.services.likes import LikeService

bp = Blueprint("likes", __name__)

toggle_schema = LikeToggleSchema()
videos_schema = VideoSchema(many=True)


def _toggled(target: str, target_id: int, auth: AuthContext):
    result = LikeService(ctx=auth.ctx).toggle(target, target_id)
    message = "Liked successfully" if result.is_liked else "Unliked successfully"
    return api_response(toggle_schema.dump(result), message)


@bp.post("/toggle/v/<int:video_id>")
@require_auth
@timing
def toggle_video_like(video_id: int, auth: AuthContext):
    return _toggled("video", video_id, auth)


@bp.post("/toggle/c/<int:comment_id>")
@require_auth
@timing
def toggle_comment_like(comment_id: int, auth: AuthContext):
    return _toggled("comment", comment_id, auth)


@bp.post("/toggle/t/<int:tweet_id>")
@require_auth
@timing
def toggle_tweet_like(tweet_id: int, auth: AuthContext):
    return _toggled("tweet", tweet_id, auth)


@bp.get("/videos")
@require_auth
@timing
def liked_videos(auth: AuthContext):
    videos = LikeService(ctx=auth.ctx).list_liked_videos()
    return api_response(videos_schema.dump(videos), "Liked videos fetched successfully")
