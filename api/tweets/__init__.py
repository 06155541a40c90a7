"""
Tweets: the primary records of the service, served together with their likes.
"""
