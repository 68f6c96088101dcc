WORLD_FEEDS = [
    # BBC
    "https://feeds.bbci.co.uk/news/world/rss.xml",
    # New York Times
    "https://rss.nytimes.com/services/xml/rss/nyt/World.xml",
    # CNN
    "https://rss.cnn.com/rss/edition_world.rss",
    # The Guardian
    "https://www.theguardian.com/world/rss",
    # NPR
    "https://feeds.npr.org/1004/rss.xml",
    # Reuters
    "https://feeds.reuters.com/reuters/worldNews",
    # Al Jazeera
    "https://www.aljazeera.com/xml/rss/all.xml",
    # Deutsche Welle
    "https://rss.dw.com/rdf/rss-en-all",
    # France 24
    "https://www.france24.com/en/rss",
    # Financial Times
    "https://www.ft.com/world?format=rss",
    # Sky News
    "https://feeds.skynews.com/feeds/rss/world.xml",
    # CBC
    "https://www.cbc.ca/cmlink/rss-world",
    # LA Times
    "https://www.latimes.com/world/rss2.0.xml",
    # The Economist
    "https://www.economist.com/sections/international/rss.xml",
    # RFI
    "https://www.rfi.fr/en/rss",
    # Global News
    "https://globalnews.ca/world/feed/",
    # South China Morning Post
    "https://www.scmp.com/rss/91/feed",
    # Japan Times
    "https://www.japantimes.co.jp/news/world/feed/",
    # Kyodo
    "https://english.kyodonews.net/rss/news.xml",
    # ABC Australia
    "https://www.abc.net.au/news/feed/51120/rss.xml",
]

# Served instead of live feeds when mock mode is on.
MOCK_HEADLINES = [
    {
        "title": "Global climate summit sees urgent pledges",
        "link": "https://example.com/a",
        "source_url": "https://mock.example.com/rss",
    },
    {
        "title": "Markets react to multi-region policy shift",
        "link": "https://example.com/b",
        "source_url": "https://mock.example.com/rss",
    },
]
