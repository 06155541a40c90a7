"""
Likes attached to tweets.

The tweets aggregation only reads likes (`repository.list_likes` and the
batched `repository.list_likes_for_tweets`); the endpoints here add and
remove them one at a time.
"""
