from gitbook_books import EmbedInfo, render_embed_block, render_embed_card
from gitbook_books.embeds import parse_embed_info

PAGE = """
<html><head>
  <title>  Fallback   Title </title>
  <meta property="og:title" content="Shiny Project">
  <meta name="description" content="A tool &amp; a library">
  <link rel="shortcut icon" href="/favicon.ico">
  <link rel="canonical" href="https://www.example.org/project">
</head><body></body></html>
"""


class FakeResolver:
    def __init__(self, info):
        self.info = info
        self.urls = []

    def resolve(self, url):
        self.urls.append(url)
        return self.info


def test_parse_embed_info_from_meta_tags():
    info = parse_embed_info('https://example.org/p?ref=1', PAGE)
    assert info.page_title == 'Shiny Project'
    assert info.page_description == 'A tool & a library'
    assert info.page_icon == 'https://example.org/favicon.ico'
    assert info.embed_url == 'https://www.example.org/project'
    assert info.embed_host == 'www.example.org'


def test_parse_embed_info_falls_back_to_title_and_url():
    info = parse_embed_info('https://example.net/x', '<title>Plain  page</title>')
    assert info.page_title == 'Plain page'
    assert info.page_description == '' and info.page_icon == ''
    assert info.embed_host == 'example.net'


def test_card_omits_empty_description_and_icon():
    card = render_embed_card(EmbedInfo(page_title='T', embed_url='https://h.io/a', embed_host='h.io'))
    assert 'embed-description' not in card and '<img' not in card
    assert '<a class="embed-link" href="https://h.io/a">h.io</a>' in card


def test_card_escapes_and_includes_optional_parts():
    info = EmbedInfo('A <b>', 'desc', 'https://h.io/i.png', 'https://h.io/', 'h.io')
    card = render_embed_card(info)
    assert 'A &lt;b&gt;' in card
    assert 'embed-description">desc<' in card
    assert 'src="https://h.io/i.png"' in card


def test_block_uses_resolver():
    r = FakeResolver(EmbedInfo(page_title='Doc', embed_url='https://d.io', embed_host='d.io'))
    out = render_embed_block({'url': 'https://d.io'}, r)
    assert r.urls == ['https://d.io']
    assert 'Doc' in out


def test_block_without_url_is_unknown_embed():
    r = FakeResolver(EmbedInfo())
    out = render_embed_block({'kind': 'video', 'id': '<x>'}, r)
    assert 'Unknown embed type' in out
    assert '&quot;kind&quot;: &quot;video&quot;' in out and '&lt;x&gt;' in out
    assert r.urls == []


def test_html_resolver_reads_page_and_caches(tmp_path, monkeypatch):
    from gitbook_books import HtmlEmbedResolver

    monkeypatch.setenv('GITBOOK_CACHE_DIR', str(tmp_path / 'cache'))
    page = tmp_path / 'page.html'
    page.write_text(PAGE, encoding='utf-8')
    info = HtmlEmbedResolver().resolve(page.as_uri())
    assert info.page_title == 'Shiny Project'
    assert info.embed_host == 'www.example.org'
    page.unlink()
    assert HtmlEmbedResolver().resolve(page.as_uri()) == info


def test_unreachable_page_degrades_to_url_only(tmp_path, monkeypatch):
    from gitbook_books import resolve_embed

    monkeypatch.setattr('gitbook_books.embeds.fetch', _failing_fetch)
    info = resolve_embed('https://gone.example.com/x', use_cache=False)
    assert info == EmbedInfo(embed_url='https://gone.example.com/x', embed_host='gone.example.com')


def _failing_fetch(url, **kw):
    from gitbook_books import FetchError

    raise FetchError('down', url=url)


def test_empty_or_invalid_url_renders_url_only_card(tmp_path, monkeypatch):
    monkeypatch.setenv('GITBOOK_CACHE_DIR', str(tmp_path / 'cache'))
    card = render_embed_block({'url': ''})
    assert 'embed-card' in card and 'Unknown embed type' not in card
    from gitbook_books import resolve_embed

    assert resolve_embed('not a url', use_cache=False) == EmbedInfo(embed_url='not a url', embed_host='')
