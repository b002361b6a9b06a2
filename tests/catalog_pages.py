"""Sample catalog pages shared by the extraction and stage tests."""

ROOT_PAGE = """
<html><body>
  <div id="genre-nav">
    <a class="top-level-genre" href="https://itunes.apple.com/us/genre/podcasts-arts/id1301?mt=2">Arts</a>
    <a class="top-level-genre">No link</a>
    <a class="top-level-genre selected" href="https://itunes.apple.com/us/genre/podcasts-business/id1321?mt=2">Business</a>
    <a class="other" href="https://itunes.apple.com/us/genre/other">Other</a>
  </div>
</body></html>
"""

CATEGORY_PAGE = """
<html><body>
  <div id="selectedgenre">
    <ul class="list alpha">
      <li><a href="https://itunes.apple.com/us/genre/podcasts-arts/id1301?mt=2&amp;letter=A">A</a></li>
      <li><a href="https://itunes.apple.com/us/genre/podcasts-arts/id1301?mt=2&amp;letter=B">B</a></li>
      <li><a>C</a></li>
    </ul>
  </div>
</body></html>
"""

ROOT_LISTING_PAGE = """
<html><body>
  <div id="selectedgenre">
    <ul class="list paginate">
      <li><a href="https://itunes.apple.com/us/genre/podcasts-arts/id1301?mt=2&amp;letter=A&amp;page=1#page">1</a></li>
      <li><a href="https://itunes.apple.com/us/genre/podcasts-arts/id1301?mt=2&amp;letter=A&amp;page=2#page">2</a></li>
      <li><a class="paginate-more" href="https://itunes.apple.com/us/genre/podcasts-arts/id1301?mt=2&amp;letter=A&amp;page=2#page">Next</a></li>
    </ul>
    <div class="column first"><ul>
      <li><a href="https://itunes.apple.com/us/podcast/first-show/id111?mt=2">First Show</a></li>
    </ul></div>
  </div>
</body></html>
"""

LEAF_LISTING_PAGE = """
<html><body>
  <div id="selectedgenre">
    <div class="column first"><ul>
      <li><a href="https://itunes.apple.com/us/podcast/first-show/id111?mt=2">First Show</a></li>
      <li><a href="https://itunes.apple.com/us/podcast/second-show/id222?mt=2">Second &amp; Show</a></li>
    </ul></div>
    <div class="column last"><ul>
      <li><a href="https://itunes.apple.com/us/podcast/third-show/id333?mt=2">Third Show</a></li>
    </ul></div>
    <div class="column" id="sidebar"><ul>
      <li><a href="https://itunes.apple.com/us/podcast/sidebar/id999?mt=2">Sidebar</a></li>
    </ul></div>
  </div>
</body></html>
"""


def podcast_page(episode_rows: str = None) -> str:
    if episode_rows is None:
        episode_rows = """
        <tr kind="episode">
          <td sort-value="1">1</td><td sort-value="Pilot">Pilot</td>
          <td sort-value="The very first one">x</td><td sort-value="Jan 05, 2016">Jan 5</td>
        </tr>
        <tr kind="episode">
          <td sort-value="2">2</td><td sort-value="Second">Second</td>
          <td sort-value="Follow up">x</td>
        </tr>
        <tr kind="episode">
          <td sort-value="3">3</td><td sort-value="Third">Third</td>
          <td sort-value="Finale">x</td><td sort-value="Mar 10, 2016">Mar 10</td>
        </tr>
        """
    return f"""
<html><body>
  <div id="title">
    <div class="left"><h1>Tom &amp; Jerry Talk</h1><h2>By  Jane Doe</h2></div>
  </div>
  <div class="lockup product podcast"><a href="#"><div><img src="https://is1.mzstatic.com/image/thumb.jpg"/></div></a></div>
  <div metrics-loc="Titledbox_Description" class="product-review"><p>A show about cats &amp; mice.</p></div>
  <ul>
    <li class="genre"><a href="#"><span>Comedy</span></a></li>
    <li class="language"><span>Language:</span> English</li>
    <li><a href="https://example.com/show">Podcast Website</a></li>
  </ul>
  <span class="rating-count" itemprop="reviewCount">1,234 Ratings</span>
  <div metrics-loc="more" class="extra-list more-by"><ul>
    <li><div><a href="https://itunes.apple.com/us/podcast/other-show/id444?mt=2">Other</a></div></li>
  </ul></div>
  <table role="presentation"><tbody>
    <tr><th>header</th></tr>
    {episode_rows}
  </tbody></table>
</body></html>
"""


MINIMAL_PODCAST_PAGE = """
<html><body><div id="title"><div class="left"><h1>Bare Show</h1></div></div></body></html>
"""
