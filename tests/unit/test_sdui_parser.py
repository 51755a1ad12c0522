"""SDUIParser tests: sections, partial failure, determinism and caching."""

import pytest
from hypothesis import given, settings as hypothesis_settings, strategies as st

from drivenui.models import LayoutComponent, WidgetComponent
from drivenui.parser import DocumentCache, SDUIParser, parse_microapp


@pytest.mark.unit
def test_parse_full_document(document):
    assert document.microapp is not None
    assert document.microapp.title == "Cards"
    assert document.microapp.code == "cards"
    assert document.microapp.short_code == "crd"
    assert document.microapp.persistents == ("cardNumber",)
    assert [s.screen_code for s in document.screens] == ["main", "details", "sheet"]
    assert [q.code for q in document.queries] == ["getCards"]
    assert not document.styles.is_empty()
    assert document.has_data()


@pytest.mark.unit
def test_query_fields(document):
    query = document.find_query("getCards")
    assert query.title == "Card list"
    assert query.type == "GET"
    assert query.endpoint == "/api/cards"
    assert query.mock_file == "cards.json"
    assert query.properties[0].variable_name == "limit"
    assert query.properties[0].variable_value == "10"
    assert query.conditions[0].value == "200"


@pytest.mark.unit
def test_screen_fields_and_tree(document):
    main = document.find_screen("main")
    assert main.title == "Main"
    assert main.short_code == "m"
    assert main.deeplink == "app://cards/main"

    root = main.root_component
    assert isinstance(root, LayoutComponent)
    assert [c.code for c in root.children] == ["header", "detailsButton"]
    assert all(isinstance(c, WidgetComponent) for c in root.children)
    assert main.component_count() == 3


@pytest.mark.unit
def test_screen_queries_attached(document):
    main = document.find_screen("main")
    assert [sq.query_code for sq in main.screen_queries] == ["getCards"]
    assert document.queries_for_screen("main")[0].code == "mainCards"
    assert document.find_screen("details").screen_queries == ()


@pytest.mark.unit
def test_screen_query_typo_and_default_screen_code():
    screen = """<screen>
        <screenCode>home</screenCode>
        <screenQueries>
            <screenQuery><code>a</code><screenСode>home</screenСode><queryCode>q1</queryCode><order>2</order></screenQuery>
            <screenQuery><code>b</code><queryCode>q2</queryCode><order>1</order></screenQuery>
        </screenQueries>
    </screen>"""
    document = SDUIParser().parse(screens=[("home.xml", screen)])

    home = document.find_screen("home")
    assert [sq.code for sq in home.screen_queries] == ["b", "a"]
    assert all(sq.screen_code == "home" for sq in home.screen_queries)


@pytest.mark.unit
def test_empty_screen_has_no_root(document):
    assert document.find_screen("sheet").root_component is None


@pytest.mark.unit
def test_malformed_screen_does_not_block_others(parser, microapp_xml, styles_xml, queries_xml, screens_xml, broken_screen_xml):
    """One broken screen yields no screen; everything else still parses."""
    screens = [("broken.xml", broken_screen_xml), *screens_xml]
    document = parser.parse(microapp_xml, styles_xml, queries_xml, screens)

    assert document.find_screen("broken") is None
    assert [s.screen_code for s in document.screens] == ["main", "details", "sheet"]
    assert document.microapp is not None
    assert len(document.queries) == 1
    assert len(document.styles.text_styles) == 2


@pytest.mark.unit
def test_malformed_sections_become_empty(parser, screens_xml):
    document = parser.parse("<microapp>", "<allStyles><textStyle>", "<query", screens_xml)

    assert document.microapp is None
    assert document.styles.is_empty()
    assert document.queries == ()
    assert len(document.screens) == 3


@pytest.mark.unit
def test_screen_without_code_is_skipped(parser):
    document = parser.parse(screens=[("a.xml", "<screen><screenLayout/></screen>"), ("b.xml", "<notAScreen/>")])
    assert document.screens == ()
    assert not document.has_data()


@pytest.mark.unit
def test_oversized_section_is_rejected():
    parser = SDUIParser(max_markup_size=64)
    big = "<screen><screenCode>big</screenCode>" + "<x/>" * 50 + "</screen>"
    document = parser.parse(screens=[("big.xml", big), ("ok.xml", "<screen><screenCode>ok</screenCode></screen>")])
    assert [s.screen_code for s in document.screens] == ["ok"]


@pytest.mark.unit
def test_too_deep_screen_is_rejected():
    nested = "<screenLayout>" * 5 + "</screenLayout>" * 5
    screen = f"<screen><screenCode>deep</screenCode>{nested}</screen>"
    document = SDUIParser(max_component_depth=4).parse(screens=[("deep.xml", screen)])
    assert document.screens == ()


@pytest.mark.unit
def test_parse_is_deterministic(parser, microapp_xml, styles_xml, queries_xml, screens_xml):
    first = parser.parse(microapp_xml, styles_xml, queries_xml, screens_xml)
    second = parser.parse(microapp_xml, styles_xml, queries_xml, screens_xml)
    assert first == second
    assert first is not second


@pytest.mark.unit
@given(st.text(alphabet=st.characters(exclude_categories=("Cs",)), max_size=200))
@hypothesis_settings(max_examples=50, deadline=None)
def test_parse_never_raises(markup):
    """Arbitrary text in any section never escapes as an exception."""
    document = SDUIParser().parse(markup, markup, markup, [("any.xml", markup)])
    assert document.screens == () or document.screens[0].screen_code


@pytest.mark.unit
def test_document_cache_shares_immutable_parts(microapp_xml, styles_xml, queries_xml, screens_xml):
    cache = DocumentCache(max_size=4)
    parser = SDUIParser(cache=cache)

    first = parser.parse(microapp_xml, styles_xml, queries_xml, screens_xml)
    second = parser.parse(microapp_xml, styles_xml, queries_xml, screens_xml)

    assert first == second
    assert first.screens is second.screens
    assert first.styles.text_styles is not second.styles.text_styles
    assert cache.stats.hits == 1
    assert len(cache) == 1


@pytest.mark.unit
def test_callers_cannot_alter_cached_document(microapp_xml, styles_xml, queries_xml, screens_xml):
    parser = SDUIParser(cache=DocumentCache())
    first = parser.parse(microapp_xml, styles_xml, queries_xml, screens_xml)

    with pytest.raises(AttributeError):
        first.screens.clear()
    with pytest.raises(AttributeError):
        first.find_screen("main").root_component.children.append(None)
    first.styles.text_styles.clear()

    second = parser.parse(microapp_xml, styles_xml, queries_xml, screens_xml)
    assert parser.cache.stats.hits == 1
    assert len(second.screens) == 3
    assert second.find_screen("main").component_count() == first.find_screen("main").component_count()
    assert len(second.styles.text_styles) == 2


CODELESS_ENTRIES = [
    pytest.param(
        "<properties><property><value>x</value></property><property><code>text</code></property></properties>",
        lambda w: [p.code for p in w.properties],
        ["text"],
        id="property",
    ),
    pytest.param(
        "<styles><style><value>x</value></style><style><code>textStyle</code><value>bodyM</value></style></styles>",
        lambda w: [s.code for s in w.styles],
        ["textStyle"],
        id="style",
    ),
    pytest.param(
        "<events><event><order>1</order></event><event><eventCode>onTap</eventCode></event></events>",
        lambda w: [e.event_code for e in w.events],
        ["onTap"],
        id="event",
    ),
    pytest.param(
        "<events><event><eventCode>onTap</eventCode><eventActions>"
        "<eventAction><order>1</order></eventAction><eventAction><code>back</code></eventAction>"
        "</eventActions></event></events>",
        lambda w: [a.code for e in w.events for a in e.actions],
        ["back"],
        id="event_action",
    ),
]


@pytest.mark.unit
@pytest.mark.parametrize("section,codes,expected", CODELESS_ENTRIES)
def test_codeless_entry_drops_only_itself(parser, section, codes, expected):
    screen = (
        "<screen><screenCode>s</screenCode><screenLayout><screenLayoutCode>root</screenLayoutCode>"
        "<screenLayoutWidget><screenLayoutWidgetCode>w</screenLayoutWidgetCode><widgetCode>label</widgetCode>"
        f"{section}</screenLayoutWidget>"
        "</screenLayout></screen>"
    )

    document = parser.parse(screens=[("s.xml", screen)])

    assert [s.screen_code for s in document.screens] == ["s"]
    widget = document.find_screen("s").root_component.children[0]
    assert widget.code == "w"
    assert codes(widget) == expected


@pytest.mark.unit
def test_parser_from_settings(settings):
    parser = SDUIParser.from_settings(settings)
    assert parser.max_markup_size == settings.max_markup_size
    # Tests run with DRIVENUI_ENABLE_CACHE=false
    assert parser.cache is None


@pytest.mark.unit
def test_document_stats(document):
    stats = document.stats()
    assert stats["microapp"] == "cards"
    assert stats["screens"] == 3
    assert stats["components"] == document.count_components() == 5
    assert stats["text_styles"] == 2


@pytest.mark.unit
def test_find_screen_by_deeplink(document):
    assert document.find_screen_by_deeplink("app://cards/details").screen_code == "details"
    assert document.find_screen_by_deeplink("app://nowhere") is None
    assert document.find_screen_by_deeplink("") is None


@pytest.mark.unit
def test_parse_microapp_convenience():
    document = parse_microapp(screens=[("main", "<screen><screenCode>main</screenCode></screen>")])
    assert document.find_screen("main").screen_code == "main"
