from newsdesk.services.news import fetch_articles
from newsdesk.services.twitter import fetch_latest_tweets

__all__ = ["fetch_articles", "fetch_latest_tweets"]
