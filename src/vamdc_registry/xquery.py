"""XQuery templates for searching the registry.

Templates use ``string.Template`` placeholders (``$capability_id``). XQuery's
own variables are written ``$$x`` so that they survive substitution.
"""

from string import Template

from .constants import RI_NS, VR_NS, XSI_NS

_RI_DECLARATION = f"declare namespace ri='{RI_NS}';"
_VR_DECLARATION = f"declare namespace vr='{VR_NS}';"
_XSI_DECLARATION = f"declare namespace xsi='{XSI_NS}';"

RESOURCES_BY_CAPABILITY = Template(
    _RI_DECLARATION + "for $$x in //ri:Resource "
    "where $$x/capability[@standardID='$capability_id'] "
    "and $$x/@status='active' "
    "return $$x"
)

IDENTIFIERS_BY_CAPABILITY = Template(
    _RI_DECLARATION + "for $$x in //ri:Resource "
    "where $$x/capability[@standardID='$capability_id'] "
    "and $$x/@status='active' "
    "return $$x/identifier"
)

WEB_BROWSER_RESOURCES = Template(
    _RI_DECLARATION + _VR_DECLARATION + _XSI_DECLARATION + "for $$x in //ri:Resource "
    "where $$x/capability/interface[@xsi:type='vr:WebBrowser'] "
    "and $$x/@status='active' "
    "return $$x"
)


def escape_xquery_literal(value: str) -> str:
    """Escape a value for a single-quoted XQuery string literal.

    XQuery expands entity references inside literals, so ``&`` must be
    written as ``&amp;``; an apostrophe is doubled.
    """
    return value.replace("&", "&amp;").replace("'", "''")


def render_xquery(template: Template, **values: str) -> str:
    """Substitute escaped values into a query template.

    Raises:
        KeyError: If the template names a placeholder with no value
    """
    escaped = {name: escape_xquery_literal(value) for name, value in values.items()}
    return template.substitute(escaped)


def resources_by_capability_query(capability_id: str) -> str:
    return render_xquery(RESOURCES_BY_CAPABILITY, capability_id=capability_id)


def identifiers_by_capability_query(capability_id: str) -> str:
    return render_xquery(IDENTIFIERS_BY_CAPABILITY, capability_id=capability_id)


def web_browser_query() -> str:
    return render_xquery(WEB_BROWSER_RESOURCES)
