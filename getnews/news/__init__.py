from getnews.news.client import NewsAPIClient, build_http_client, build_news_cache


__all__ = ['NewsAPIClient', 'build_http_client', 'build_news_cache']
