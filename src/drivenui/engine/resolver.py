"""Resolution of component trees against the runtime context.

Parsed trees are never modified; every function here returns a copy.
"""

from ..models.components import LayoutComponent, WidgetComponent, background_style, round_style
from ..models.document import ScreenDefinition
from .context import ContextStore
from .expression import resolve_value_expression

AnyComponent = LayoutComponent | WidgetComponent


class ComponentResolver:
    """
    Fill ``resolved_value`` on properties and style references.

    Children of loop layouts (``verticalFor`` / ``horizontalFor``) are left
    unresolved: they are templates expanded per index by the renderer.
    """

    def __init__(self, context: ContextStore) -> None:
        self.context = context

    def resolve(self, component: AnyComponent) -> AnyComponent:
        styles = tuple(
            style.model_copy(update={"resolved_value": self._value(style.value)})
            for style in component.styles
        )
        update: dict = {
            "properties": tuple(
                prop.model_copy(update={"resolved_value": self._value(prop.value)})
                for prop in component.properties
            ),
            "styles": styles,
        }
        if isinstance(component, LayoutComponent):
            update["background_style_code"] = background_style(styles)
            update["round_style_code"] = round_style(styles)
            if not component.layout_kind.is_loop:
                update["children"] = tuple(self.resolve(child) for child in component.children)
        return component.model_copy(update=update)

    def resolve_screen(self, screen: ScreenDefinition) -> ScreenDefinition:
        if screen.root_component is None:
            return screen
        return screen.model_copy(update={"root_component": self.resolve(screen.root_component)})

    def refresh_widget(self, root: AnyComponent | None, widget_code: str) -> AnyComponent | None:
        """Re-resolve widgets whose ``code`` or ``widget_code`` matches; others untouched."""
        if root is None:
            return None
        if isinstance(root, WidgetComponent):
            if widget_code in (root.code, root.widget_code):
                return self.resolve(root)
            return root
        children = tuple(self.refresh_widget(child, widget_code) for child in root.children)
        return root.model_copy(update={"children": children})

    def _value(self, raw: str) -> str:
        return resolve_value_expression(raw, self.context)


__all__ = ["ComponentResolver"]
