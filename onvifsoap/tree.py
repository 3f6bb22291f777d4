"""
Generic element tree for SOAP responses, addressable by dotted paths.

Paths use local element names with namespace prefixes dropped, starting at the
document element, e.g. ``Envelope.Body.Fault.Reason.Text.#text``. A ``#text``
segment selects the element text and a ``-name`` segment selects an attribute.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import MalformedXML


def _local(name: str) -> str:
    return name.rsplit('}', 1)[-1]


@dataclass
class XmlNode:
    """One element: local name, namespace, attributes, text and children."""
    name: str
    namespace: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    children: List['XmlNode'] = field(default_factory=list)

    @classmethod
    def from_element(cls, element: ET.Element) -> 'XmlNode':
        namespace = None
        if element.tag.startswith('{'):
            namespace = element.tag[1:].split('}', 1)[0]
        text = (element.text or '').strip() or None
        return cls(
            name=_local(element.tag),
            namespace=namespace,
            attributes={_local(k): v for k, v in element.attrib.items()},
            text=text,
            children=[cls.from_element(child) for child in element],
        )

    def children_named(self, name: str) -> List['XmlNode']:
        return [child for child in self.children if child.name == name]

    def find_all(self, path: str) -> List['XmlNode']:
        """Return every element matching path (no #text/-attr segments)."""
        segments = path.split('.')
        if not segments or segments[0] != self.name:
            return []
        nodes = [self]
        for segment in segments[1:]:
            nodes = [child for node in nodes for child in node.children_named(segment)]
            if not nodes:
                break
        return nodes

    def find(self, path: str) -> Optional['XmlNode']:
        nodes = self.find_all(path)
        return nodes[0] if nodes else None

    def value_for_path(self, path: str) -> Optional[str]:
        """
        Look up a string value, or None when the path is absent.

        An element path yields the element text ('' for an empty element).
        """
        head, _, last = path.rpartition('.')
        if last == '#text' or last.startswith('-'):
            node = self.find(head) if head else None
            if node is None:
                return None
            if last == '#text':
                return node.text if node.text is not None else ''
            return node.attributes.get(last[1:])
        node = self.find(path)
        if node is None:
            return None
        return node.text if node.text is not None else ''

    def _value(self) -> Any:
        if not self.attributes and not self.children:
            return self.text if self.text is not None else ''

        value: Dict[str, Any] = {f'-{k}': v for k, v in self.attributes.items()}
        for child in self.children:
            child_value = child._value()
            if child.name in value:
                existing = value[child.name]
                if isinstance(existing, list):
                    existing.append(child_value)
                else:
                    value[child.name] = [existing, child_value]
            else:
                value[child.name] = child_value
        if self.text is not None:
            value['#text'] = self.text
        return value

    def to_dict(self) -> Dict[str, Any]:
        """Render as nested dicts keyed by local name (repeated siblings become lists)."""
        return {self.name: self._value()}


def parse_xml(data: bytes) -> XmlNode:
    """Parse raw response bytes into an XmlNode tree."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise MalformedXML(f"Response is not well-formed XML: {e}") from e
    return XmlNode.from_element(root)
