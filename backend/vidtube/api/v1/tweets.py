"""Tweet endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from vidtube.api.deps import api_response, require_auth, timing
from vidtube.schemas import TweetContentSchema, TweetFeedItemSchema, TweetSchema
from vidtube.services.auth import AuthContext
from vidtube.services.tweets import TweetService

bp = Blueprint("tweets", __name__)

content_schema = TweetContentSchema()
tweet_schema = TweetSchema()
feed_schema = TweetFeedItemSchema(many=True)


@bp.post("")
@require_auth
@timing
def create_tweet(auth: AuthContext):
    data = content_schema.load(request.get_json(silent=True) or {})
    tweet = TweetService(ctx=auth.ctx).create_tweet(data["content"])
    return api_response(tweet_schema.dump(tweet), "Tweet created successfully", status=201)


@bp.get("/user/<int:user_id>")
@require_auth
@timing
def list_user_tweets(user_id: int, auth: AuthContext):
    """List a user's tweets, newest first, with like aggregates for the caller."""

    tweets = TweetService(ctx=auth.ctx).list_user_tweets(user_id)
    return api_response(feed_schema.dump(tweets), "Tweets fetched successfully")


@bp.patch("/<int:tweet_id>")
@require_auth
@timing
def update_tweet(tweet_id: int, auth: AuthContext):
    data = content_schema.load(request.get_json(silent=True) or {})
    tweet = TweetService(ctx=auth.ctx).update_tweet(tweet_id, data["content"])
    return api_response(tweet_schema.dump(tweet), "Tweet updated successfully")


@bp.delete("/<int:tweet_id>")
@require_auth
@timing
def delete_tweet(tweet_id: int, auth: AuthContext):
    TweetService(ctx=auth.ctx).delete_tweet(tweet_id)
    return api_response({}, "Tweet deleted successfully")
