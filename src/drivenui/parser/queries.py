"""Query and screen-query parsers."""

from lxml import etree

from ..models.document import Query, QueryCondition, QueryProperty, ScreenQuery
from .cursor import MarkupCursor, local_name


def _query_properties(cursor: MarkupCursor, element: etree._Element) -> list[QueryProperty]:
    properties = []
    for child in cursor.children(element):
        if local_name(child) != "property":
            cursor.skip(child)
            continue
        fields = {"code": "", "variable_name": "", "variable_value": ""}
        for field in cursor.children(child):
            match local_name(field):
                case "code":
                    fields["code"] = cursor.text(field)
                case "variableName":
                    fields["variable_name"] = cursor.text(field)
                case "variableValue":
                    fields["variable_value"] = cursor.text(field)
                case _:
                    cursor.skip(field)
        properties.append(QueryProperty(**fields))
    return properties


def _query_conditions(cursor: MarkupCursor, element: etree._Element) -> list[QueryCondition]:
    conditions = []
    for child in cursor.children(element):
        if local_name(child) != "condition":
            cursor.skip(child)
            continue
        code = value = ""
        for field in cursor.children(child):
            match local_name(field):
                case "code":
                    code = cursor.text(field)
                case "value":
                    value = cursor.text(field)
                case _:
                    cursor.skip(field)
        conditions.append(QueryCondition(code=code, value=value))
    return conditions


class QueryParser:
    """Reads ``<query>`` declarations from the query block."""

    def parse(self, markup: str) -> list[Query]:
        cursor = MarkupCursor(markup, section="queries")
        queries = []
        for element in cursor.find_all("query"):
            query = self.parse_query(cursor, element)
            if query is not None:
                queries.append(query)
        return queries

    def parse_query(self, cursor: MarkupCursor, element: etree._Element) -> Query | None:
        code = type_ = endpoint = ""
        mock_file: str | None = None
        properties: list[QueryProperty] = []
        conditions: list[QueryCondition] = []
        for child in cursor.children(element):
            match local_name(child):
                case "code":
                    code = cursor.text(child)
                case "type":
                    type_ = cursor.text(child)
                case "endpoint":
                    endpoint = cursor.text(child)
                case "mockFile":
                    mock_file = cursor.text(child) or None
                case "properties":
                    properties = _query_properties(cursor, child)
                case "conditions":
                    conditions = _query_conditions(cursor, child)
                case _:
                    cursor.skip(child)
        if not code:
            return None
        return Query(
            title=element.get("title", ""),
            code=code,
            type=type_,
            endpoint=endpoint,
            mock_file=mock_file,
            properties=properties,
            conditions=conditions,
        )


def parse_screen_query(cursor: MarkupCursor, element: etree._Element) -> ScreenQuery:
    fields: dict = {"properties": []}
    for child in cursor.children(element):
        match local_name(child):
            case "code":
                fields["code"] = cursor.text(child)
            # Cyrillic "С" appears in some published bundles
            case "screenCode" | "screenСode":
                fields["screen_code"] = cursor.text(child)
            case "queryCode":
                fields["query_code"] = cursor.text(child)
            case "order":
                fields["order"] = cursor.int_text(child)
            case "properties":
                fields["properties"] = _query_properties(cursor, child)
            case _:
                cursor.skip(child)
    return ScreenQuery(**fields)


__all__ = ["QueryParser", "parse_screen_query"]
