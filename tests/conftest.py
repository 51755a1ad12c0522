"""Pytest configuration and fixtures."""

import os

import pytest

from drivenui.core import create_container, get_settings
from drivenui.engine import (
    ActionDispatcher,
    ContextStore,
    NativeError,
    NativeSuccess,
    NavigationStack,
    ScreenState,
    StaticDeeplinkHandler,
)
from drivenui.engine.session import DocumentScreenProvider
from drivenui.models import Document, ScreenDefinition
from drivenui.parser import SDUIParser


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["DRIVENUI_LOG_LEVEL"] = "DEBUG"
    os.environ["DRIVENUI_ENABLE_CACHE"] = "false"  # Disable cache in tests


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
def di_container(settings):
    """Dependency injection container for testing."""
    return create_container(settings)


@pytest.fixture
def parser():
    """Parser without a document cache."""
    return SDUIParser()


# ============================================================================
# Markup Fixtures
# ============================================================================

MICROAPP_XML = """<?xml version="1.0" encoding="UTF-8"?>
<microapp title="Cards">
    <code>cards</code>
    <shortCode>crd</shortCode>
    <deeplink>app://cards</deeplink>
    <persistents>
        <persistent>cardNumber</persistent>
    </persistents>
    <screens>
        <screen title="ignored"><screenCode>ignored</screenCode></screen>
    </screens>
</microapp>
"""

STYLES_XML = """<allStyles>
    <textStyles>
        <textStyle>
            <code>bodyM</code>
            <fontFamily>Roboto</fontFamily>
            <fontSize>16</fontSize>
            <fontWeight>400</fontWeight>
        </textStyle>
        <textStyle>
            <code>headerL</code>
            <fontSize>24</fontSize>
            <fontWeight>700</fontWeight>
        </textStyle>
    </textStyles>
    <colorStyles>
        <colorStyle>
            <code>primary</code>
            <lightTheme><color>#112233</color><opacity>80</opacity></lightTheme>
            <darkTheme><color>#FFFFFF</color></darkTheme>
        </colorStyle>
    </colorStyles>
    <alignStyles>
        <alignStyle><code>alignCenter</code></alignStyle>
    </alignStyles>
    <paddingStyles>
        <paddingStyle>
            <code>cardPadding</code>
            <paddingLeft>16</paddingLeft>
            <paddingTop>8</paddingTop>
            <paddingRight>16</paddingRight>
            <paddingBottom>8</paddingBottom>
        </paddingStyle>
    </paddingStyles>
    <roundStyles>
        <roundStyle><code>round12</code><radiusValue>12</radiusValue></roundStyle>
    </roundStyles>
</allStyles>
"""

QUERIES_XML = """<allQueries>
    <query title="Card list">
        <code>getCards</code>
        <type>GET</type>
        <endpoint>/api/cards</endpoint>
        <mockFile>cards.json</mockFile>
        <properties>
            <property>
                <code>query</code>
                <variableName>limit</variableName>
                <variableValue>10</variableValue>
            </property>
        </properties>
        <conditions>
            <condition><code>status</code><value>200</value></condition>
        </conditions>
    </query>
    <query title="no code is dropped"><type>GET</type></query>
</allQueries>
"""

MAIN_SCREEN_XML = """<screen title="Main">
    <screenCode>main</screenCode>
    <screenShortCode>m</screenShortCode>
    <deeplink>app://cards/main</deeplink>
    <screenQueries>
        <screenQuery>
            <code>mainCards</code>
            <screenCode>main</screenCode>
            <queryCode>getCards</queryCode>
            <order>1</order>
        </screenQuery>
    </screenQueries>
    <screenLayout title="root">
        <screenLayoutCode>rootLayout</screenLayoutCode>
        <layoutCode>vertical</layoutCode>
        <styles>
            <style><code>colorStyle</code><value>primary</value></style>
            <style><code>roundStyle</code><value>round12</value></style>
        </styles>
        <screenLayoutWidget title="Header">
            <screenLayoutWidgetCode>header</screenLayoutWidgetCode>
            <widgetCode>label</widgetCode>
            <properties>
                <property><code>text</code><value>Hello @{cards.userName}</value></property>
            </properties>
            <styles>
                <style><code>textStyle</code><value>headerL</value></style>
            </styles>
        </screenLayoutWidget>
        <screenLayoutWidget title="Open details">
            <screenLayoutWidgetCode>detailsButton</screenLayoutWidgetCode>
            <widgetCode>button</widgetCode>
            <events>
                <event>
                    <eventCode>onTap</eventCode>
                    <eventActions>
                        <eventAction title="open">
                            <code>openScreen</code>
                            <properties>
                                <property><code>screenCode</code><value>details</value></property>
                            </properties>
                        </eventAction>
                    </eventActions>
                </event>
            </events>
        </screenLayoutWidget>
        <unknownTag><screenLayoutWidget><widgetCode>hidden</widgetCode></screenLayoutWidget></unknownTag>
    </screenLayout>
</screen>
"""

DETAILS_SCREEN_XML = """<screen title="Details">
    <screenCode>details</screenCode>
    <deeplink>app://cards/details</deeplink>
    <screenLayout>
        <screenLayoutCode>detailsRoot</screenLayoutCode>
        <layoutCode>verticalFor</layoutCode>
        <forIndexName>i</forIndexName>
        <screenLayoutWidget>
            <screenLayoutWidgetCode>row</screenLayoutWidgetCode>
            <widgetCode>label</widgetCode>
            <properties>
                <property><code>text</code><value>@{cards.userName}</value></property>
            </properties>
        </screenLayoutWidget>
    </screenLayout>
</screen>
"""

SHEET_SCREEN_XML = """<screen title="Sheet">
    <screenCode>sheet</screenCode>
</screen>
"""

BROKEN_SCREEN_XML = """<screen title="Broken">
    <screenCode>broken</screenCode>
    <screenLayout>
"""


@pytest.fixture
def microapp_xml():
    return MICROAPP_XML


@pytest.fixture
def styles_xml():
    return STYLES_XML


@pytest.fixture
def queries_xml():
    return QUERIES_XML


@pytest.fixture
def screens_xml():
    """(name, markup) pairs for the sample microapp."""
    return [
        ("main.xml", MAIN_SCREEN_XML),
        ("details.xml", DETAILS_SCREEN_XML),
        ("sheet.xml", SHEET_SCREEN_XML),
    ]


@pytest.fixture
def broken_screen_xml():
    return BROKEN_SCREEN_XML


@pytest.fixture
def document(parser, microapp_xml, styles_xml, queries_xml, screens_xml) -> Document:
    """Fully parsed sample document."""
    return parser.parse(microapp_xml, styles_xml, queries_xml, screens_xml)


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def context():
    """Empty context store."""
    return ContextStore()


@pytest.fixture
def navigation():
    """Navigation stack holding a root frame."""
    stack = NavigationStack()
    stack.push(ScreenState.from_definition(ScreenDefinition(screen_code="root")))
    return stack


class FakeNativeExecutor:
    """Host executor double recording its calls."""

    def __init__(self, result=None, raises: Exception | None = None):
        self.result = result if result is not None else NativeSuccess()
        self.raises = raises
        self.calls: list[tuple[str, dict[str, str]]] = []

    async def execute(self, action_code, parameters):
        self.calls.append((action_code, parameters))
        if self.raises is not None:
            raise self.raises
        return self.result


@pytest.fixture
def native_executor():
    return FakeNativeExecutor(NativeSuccess({"balance": 100, "currency": "EUR"}))


@pytest.fixture
def failing_executor():
    return FakeNativeExecutor(NativeError("card blocked", ValueError("blocked")))


@pytest.fixture
def deeplink_handler():
    return StaticDeeplinkHandler(prefixes=("https://",))


@pytest.fixture
def dispatcher(document, navigation, context, native_executor, deeplink_handler):
    """Dispatcher over the sample document with microapp scope ``cards``."""
    return ActionDispatcher(
        navigation=navigation,
        context=context,
        screens=DocumentScreenProvider(document),
        native_executor=native_executor,
        deeplink_handler=deeplink_handler,
        microapp_code="cards",
    )
