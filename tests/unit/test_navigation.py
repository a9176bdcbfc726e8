from apidoc_viewer.config import NavigationConfig
from apidoc_viewer.viewer.events import EventKind
from apidoc_viewer.viewer.navigation import NavigationTrigger
from apidoc_viewer.viewer.viewport import ScrollOptions, Viewport


def test_go_to_rendered_section_scrolls_smoothly() -> None:
    viewport = Viewport(["introduction", "server-production"])

    assert NavigationTrigger(viewport).go_to("server-production") is True
    assert viewport.in_view == "server-production"
    assert viewport.history[0].options == ScrollOptions(behavior="smooth", block="start")


def test_missing_element_has_no_side_effect() -> None:
    viewport = Viewport(["introduction"])
    observed = []
    trigger = NavigationTrigger(viewport, observer=observed.append)

    assert trigger.go_to("schema-User") is False
    assert viewport.history == []
    assert viewport.in_view is None
    assert [event.kind for event in observed] == [EventKind.NAVIGATION_MISSED]
    assert observed[0].is_warning is False


def test_scroll_errors_become_failures() -> None:
    class _Broken:
        def scroll_to(self, element_id, options):
            raise RuntimeError("detached element")

    observed = []
    trigger = NavigationTrigger(_Broken(), observer=observed.append)

    assert trigger.go_to("introduction") is False
    assert observed[0].kind is EventKind.NAVIGATION_FAILED
    assert observed[0].detail["error"] == "detached element"


def test_disabled_navigation_never_scrolls() -> None:
    viewport = Viewport(["introduction"])
    trigger = NavigationTrigger(viewport, NavigationConfig(enabled=False))

    assert trigger.go_to("introduction") is False
    assert viewport.history == []


def test_remount_drops_stale_focus() -> None:
    viewport = Viewport(["server-a", "server-b"])
    viewport.scroll_to("server-a")

    viewport.mount(["server-b"])

    assert viewport.in_view is None
    assert "server-a" not in viewport
