"""
Relationship index over a response document.

SmartAPI responses do not nest related entities. A credit score, the credit
file that reported it and the borrower role it belongs to are siblings in
different containers, connected by RELATIONSHIP elements that carry xlink
from/to labels and an arcrole URN. The index is built once per document so
every hop is a dictionary lookup instead of a document scan.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from lxml import etree

from ..document import ARCROLE_PREFIX, xlink, xpath

logger = logging.getLogger(__name__)


# =============================================================================
# EDGE TYPES
# =============================================================================

CREDIT_FILE_TO_ROLE = "CREDIT_FILE_IsAssociatedWith_ROLE"
CREDIT_SCORE_TO_ROLE = "CREDIT_SCORE_IsAssociatedWith_ROLE"
# from = CREDIT_SCORE, to = CREDIT_FILE
CREDIT_SCORE_TO_CREDIT_FILE = "CREDIT_FILE_IsAssociatedWith_CREDIT_SCORE"
# from = CREDIT_SCORE_MODEL, to = CREDIT_FILE
CREDIT_SCORE_MODEL_TO_CREDIT_FILE = "CREDIT_FILE_IsAssociatedWith_CREDIT_SCORE_MODEL"
CREDIT_LIABILITY_TO_ROLE = "CREDIT_LIABILITY_IsAssociatedWith_ROLE"

RELATIONSHIP_PATH = "//P1:SERVICE/P1:RELATIONSHIPS/P1:RELATIONSHIP"


def _edge_name(arcrole: str) -> str:
    if arcrole.startswith(ARCROLE_PREFIX):
        return arcrole[len(ARCROLE_PREFIX):]
    return arcrole


class RelationshipIndex:
    """
    Adjacency lists keyed by edge name, plus a label lookup for elements.

    Lists keep document order. The first element carrying a given
    (element name, label) pair wins.
    """

    def __init__(self, root: etree._Element):
        self._sources: Dict[Tuple[str, str], List[str]] = defaultdict(list)
        self._targets: Dict[Tuple[str, str], List[str]] = defaultdict(list)
        self._labeled: Dict[Tuple[str, str], etree._Element] = {}

        edge_count = 0
        for relationship in xpath(root, RELATIONSHIP_PATH):
            arcrole = relationship.get(xlink("arcrole"))
            from_label = relationship.get(xlink("from"))
            to_label = relationship.get(xlink("to"))
            if not (arcrole and from_label and to_label):
                continue
            edge = _edge_name(arcrole)
            self._sources[(edge, to_label)].append(from_label)
            self._targets[(edge, from_label)].append(to_label)
            edge_count += 1

        label_attr = xlink("label")
        for element in root.iter(etree.Element):
            label = element.get(label_attr)
            if label:
                key = (etree.QName(element).localname, label)
                self._labeled.setdefault(key, element)

        logger.debug(f"Indexed {edge_count} relationships and {len(self._labeled)} labeled elements")

    def sources(self, edge: str, to_label: str) -> List[str]:
        """Labels on the 'from' side of edges of this type pointing at to_label."""
        return list(self._sources.get((edge, to_label), []))

    def targets(self, edge: str, from_label: str) -> List[str]:
        """Labels on the 'to' side of edges of this type leaving from_label."""
        return list(self._targets.get((edge, from_label), []))

    def element(self, local_name: str, label: str) -> Optional[etree._Element]:
        return self._labeled.get((local_name, label))
