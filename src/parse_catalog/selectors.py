"""XPath selectors for the podcast catalog pages."""

# Root page
CATEGORY_URLS = "//a[contains(@class,'top-level-genre')]"

# Category page
CHARACTER_URLS = "//div[@id='selectedgenre']/ul[@class='list alpha']/li/a"

# Listing pages
NUMERIC_URLS = "//ul[@class='list paginate']/li/a"
PODCAST_URLS = "//div[contains(@class,'column') and not(@id)]/ul/li/a"

# Podcast page
TITLE = "//div[@id='title']/div[@class='left']/h1"
AUTHOR = "//div[@id='title']/div[@class='left']/h2"
DESCRIPTION = "//div[@metrics-loc='Titledbox_Description' and @class='product-review']/p"
THUMBNAIL = "//div[@class='lockup product podcast']/a/div/img"
CATEGORY = "//li[@class='genre']/a/span"
LANGUAGE = "//li[@class='language']"
RATINGS = "//span[@class='rating-count' and @itemprop='reviewCount']"
WEBSITE = "//ul/li/a[text() = 'Podcast Website']"
MORE_FROM_AUTHOR = "//div[@metrics-loc and @class='extra-list more-by']/ul/li/div/a"
RELATED_PODCASTS = (
    "//div[@metrics-loc='Swoosh_']//div[@class='lockup small podcast audio']/a[@class='artwork-link']"
)
EPISODES = "//table[@role='presentation']//tr[@kind]"

# Listing URLs carrying this marker are single pages of a paginated listing
PAGE_INDEX_MARKER = "&page="
