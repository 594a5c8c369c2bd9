from pathlib import Path
from gitbook_books import build_toc, load_revision, parse_revision, toc_to_dicts

EXPORT = Path(__file__).parent / 'fixtures' / 'export'


def test_build_toc_current_version_flattens_root_children():
    manifest = load_revision(str(EXPORT))
    assert toc_to_dicts(build_toc(manifest, 'current')) == [
        {'uid': 'r1', 'title': 'Intro', 'type': 'page', 'path': 'intro.md', 'children': []},
        {'uid': '', 'title': 'Ch1', 'type': 'page', 'path': 'ch1.md', 'children': []},
        {'uid': '', 'title': 'Group', 'type': 'section', 'path': '', 'children': []},
    ]


def test_root_is_page_without_children_even_for_group_root():
    manifest = load_revision(str(EXPORT))
    toc = build_toc(manifest, 'v0')
    assert toc[0].type == 'page'
    assert toc[0].children == []
    assert toc[0].title == 'Welcome'


def test_nesting_preserved_below_root():
    manifest = load_revision(str(EXPORT))
    toc = build_toc(manifest, 'v0')
    assert len(toc) == 2
    guides = toc[1]
    assert guides.type == 'section' and guides.uid == 'g1' and guides.path == ''
    assert [(c.uid, c.type, c.path) for c in guides.children] == [
        ('p1', 'page', 'guides/install.md'),
        ('p2', 'page', 'guides/upgrade.md'),
    ]
    assert guides.children[0].children == []


def test_unknown_version_yields_empty_toc():
    manifest = load_revision(str(EXPORT))
    assert build_toc(manifest, 'no-such-version') == []


def test_current_with_missing_primary_version_is_empty():
    manifest = parse_revision({'primaryVersionID': 'gone', 'versions': {}, 'assets': {}})
    assert build_toc(manifest) == []


def test_unrecognized_kind_is_section():
    manifest = parse_revision({
        'primaryVersionID': 'v',
        'versions': {'v': {'title': 'V', 'page': {
            'title': 'Root', 'kind': 'link',
            'pages': [{'title': 'Ext', 'kind': 'link', 'path': 'x'}],
        }}},
    })
    toc = build_toc(manifest)
    assert toc[0].uid == '' and toc[0].path == ''
    assert toc[1].type == 'section'
