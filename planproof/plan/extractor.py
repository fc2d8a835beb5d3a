"""Plan object extraction from namespaced execution-plan documents.

Every element in a SQL Server SHOWPLAN document lives inside
:data:`SHOWPLAN_NAMESPACE`.  A lookup for ``Object`` without that namespace
matches nothing, and an empty object list makes every "must not reference"
assertion pass.  :func:`extract_plan_objects` therefore takes the namespace
as a required argument instead of defaulting it.

Example::

    from planproof.plan.extractor import SHOWPLAN_NAMESPACE, extract_plan_objects

    objects = extract_plan_objects(plan_xml, SHOWPLAN_NAMESPACE)
    tables = {o.table for o in objects}
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from planproof.errors import CaptureError
from planproof.schema.plan_object import PlanObject

#: Namespace of SQL Server SHOWPLAN XML (2005 and later).
SHOWPLAN_NAMESPACE = "http://schemas.microsoft.com/sqlserver/2004/07/showplan"

# Text already decoded by the driver may still carry an encoding="utf-16"
# declaration, which expat rejects for str input.
_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")

#: Local name of the element carrying Schema / Table / Index attributes.
OBJECT_ELEMENT = "Object"


def strip_brackets(value: str | None) -> str:
    """Remove one pair of enclosing SQL Server brackets from an identifier.

    ``"[dbo]"`` → ``"dbo"``; ``"dbo"`` is returned unchanged; ``None`` and
    ``""`` become ``""``.
    """
    if not value:
        return ""
    if len(value) >= 2 and value[0] == "[" and value[-1] == "]":
        return value[1:-1]
    return value


def extract_plan_objects(plan_xml: str, namespace: str) -> list[PlanObject]:
    """Return every object reference found in ``plan_xml``.

    Elements without a ``Table`` attribute are skipped.  Missing ``Schema``
    and ``Index`` attributes become ``""``.  Results keep document order and
    are not de-duplicated; a plan that scans the same index twice yields two
    entries.

    Args:
        plan_xml: The raw plan document.
        namespace: Namespace URI the plan's elements are declared in.  Pass
            ``""`` only for documents that genuinely declare no namespace.

    Returns:
        The extracted :class:`PlanObject` list.

    Raises:
        CaptureError: If ``plan_xml`` is not well-formed.
    """
    try:
        root = ET.fromstring(_XML_DECLARATION.sub("", plan_xml, count=1))
    except ET.ParseError as exc:
        raise CaptureError(f"Captured plan is not well-formed XML: {exc}", raw=plan_xml) from exc

    tag = f"{{{namespace}}}{OBJECT_ELEMENT}" if namespace else OBJECT_ELEMENT

    objects: list[PlanObject] = []
    for element in root.iter(tag):
        table = strip_brackets(element.get("Table"))
        if not table:
            continue
        objects.append(
            PlanObject(
                schema=strip_brackets(element.get("Schema")),
                table=table,
                index=strip_brackets(element.get("Index")),
            )
        )
    return objects
