"""
Consumer credit response parser.

Resolves borrower-scoped data from a credit response by walking the
relationship graph:

    ROLE <- CREDIT_FILE               (bureau responses)
    ROLE <- CREDIT_SCORE -> CREDIT_FILE <- CREDIT_SCORE_MODEL   (scores and ranges)
    ROLE <- CREDIT_LIABILITY          (tradelines)

Person-scoped queries take 'b' (borrower) or 'c' (co-borrower). Use
is_person_present() before querying a person that may be absent.
"""
from __future__ import annotations
import copy
import logging
from dataclasses import fields
from typing import Any, Dict, List, Optional, Tuple, Union

from lxml import etree

from ...exceptions import GraphResolutionError, InvalidRatingCodeError, PersonNotPresentError
from ...models.wire import BureauResponse, CreditScore, Liability, Person, ScoreFactor
from ..document import descendant_text, first_text, text_of, xpath
from .graph import (
    CREDIT_FILE_TO_ROLE,
    CREDIT_LIABILITY_TO_ROLE,
    CREDIT_SCORE_MODEL_TO_CREDIT_FILE,
    CREDIT_SCORE_TO_CREDIT_FILE,
    CREDIT_SCORE_TO_ROLE,
    RelationshipIndex,
)
from .parser import CREDIT_RESPONSE_PATH, ResponseParser

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

BUREAU_SOURCE_TYPES = ("Equifax", "Experian", "TransUnion")

ROLE_LABEL_PATH = (
    f"{CREDIT_RESPONSE_PATH}/P1:PARTIES/P1:PARTY/P1:ROLES"
    "/P1:ROLE[P1:BORROWER/P1:BORROWER_DETAIL/P1:BorrowerClassificationType = $classification]/@P2:label"
)
ALL_LIABILITIES_PATH = "//P1:SERVICE/P1:CREDIT/P1:CREDIT_RESPONSE/P1:CREDIT_LIABILITIES/P1:CREDIT_LIABILITY"
BUREAU_REMARKS_PATH = (
    "P1:CREDIT_COMMENTS/P1:CREDIT_COMMENT[P1:CreditCommentSourceType = 'CreditBureau']/P1:CreditCommentText"
)
SCORE_MODEL_DETAIL_PATH = (
    "P1:CREDIT_SCORE_MODEL_DETAIL[P1:CreditScoreModelNameType = $model_name"
    " or P1:CreditScoreModelNameTypeOtherDescription = $model_name]"
)

# Current rating code -> rating text
RATING_TEXT = {
    "X": "NoDataAvailable",
    "-": "NoDataAvailable",
    "C": "AsAgreed",
    "1": "Late30Days",
    "2": "Late60Days",
    "3": "Late90Days",
    "4": "LateOver120Days",
    "5": "LateOver120Days",
    "6": "LateOver120Days",
    "7": "BankruptcyOrWageEarnerPlan",
    "8": "ForeclosureOrRepossession",
    "9": "CollectionOrChargeOff",
}

PersonKey = Union[str, Person]


class ConsumerCreditResponseParser(ResponseParser):
    """
    Parsed consumer credit response.

    Results are computed on first request and cached; every accessor returns
    a fresh copy so callers may mutate what they receive.
    """

    def __init__(self, xml_response: Union[str, bytes]):
        super().__init__(xml_response)
        self._graph = RelationshipIndex(self._root)
        self._role_labels: Dict[Person, Optional[str]] = {
            person: self._find_role_label(person) for person in Person
        }
        self._cache: Dict[Tuple[str, Optional[Person]], Any] = {}

    # -------------------------------------------------------------------------
    # Person presence
    # -------------------------------------------------------------------------

    def _find_role_label(self, person: Person) -> Optional[str]:
        labels = xpath(self._root, ROLE_LABEL_PATH, classification=person.classification)
        if not labels:
            return None
        return text_of(labels[0]) or None

    def is_person_present(self, person: PersonKey) -> bool:
        return self._role_labels[Person.parse(person)] is not None

    def get_role_label(self, person: PersonKey) -> Optional[str]:
        return self._role_labels[Person.parse(person)]

    def _require_person(self, person: PersonKey) -> Tuple[Person, str]:
        person = Person.parse(person)
        label = self._role_labels[person]
        if label is None:
            raise PersonNotPresentError(person.value)
        return person, label

    def _cached(self, name: str, person: Optional[Person], compute):
        key = (name, person)
        if key not in self._cache:
            self._cache[key] = compute()
        return copy.deepcopy(self._cache[key])

    # -------------------------------------------------------------------------
    # Credit files
    # -------------------------------------------------------------------------

    def _credit_file(self, label: str) -> Optional[etree._Element]:
        return self._graph.element("CREDIT_FILE", label)

    def _source_type(self, credit_file: Optional[etree._Element]) -> str:
        if credit_file is None:
            return ""
        return first_text(credit_file, "P1:CREDIT_FILE_DETAIL/P1:CreditRepositorySourceType") or ""

    def _load_credit_file_labels(self, role_label: str) -> List[str]:
        labels = []
        for label in self._graph.sources(CREDIT_FILE_TO_ROLE, role_label):
            source_type = self._source_type(self._credit_file(label))
            if source_type in BUREAU_SOURCE_TYPES:
                labels.append(label)
            else:
                logger.debug(f"Skipping credit file {label}: source type {source_type!r} is not a bureau")
        return labels

    def get_credit_file_labels(self, person: PersonKey) -> List[str]:
        """Labels of the bureau CREDIT_FILEs linked to the person's role, in document order."""
        person, role_label = self._require_person(person)
        return self._cached(
            "credit_file_labels", person,
            lambda: self._load_credit_file_labels(role_label),
        )

    def get_bureau_responses(self, person: PersonKey) -> List[BureauResponse]:
        """One result per bureau credit file: bureau name, result status and error text."""
        labels = self.get_credit_file_labels(person)
        person = Person.parse(person)

        def compute() -> List[BureauResponse]:
            responses = []
            for label in labels:
                credit_file = self._credit_file(label)
                responses.append(BureauResponse(
                    bureau_name=descendant_text(credit_file, "CreditRepositorySourceType") or "",
                    result=descendant_text(credit_file, "CreditFileResultStatusType") or "",
                    error_description=descendant_text(credit_file, "CreditErrorMessageText") or "",
                ))
            return responses

        return self._cached("bureau_responses", person, compute)

    # -------------------------------------------------------------------------
    # Scores
    # -------------------------------------------------------------------------

    def _score_range(self, file_label: str, model_name: str) -> Tuple[str, str]:
        """(maximum, minimum) from the first score model of the file matching model_name."""
        for model_label in self._graph.sources(CREDIT_SCORE_MODEL_TO_CREDIT_FILE, file_label):
            model = self._graph.element("CREDIT_SCORE_MODEL", model_label)
            if model is None:
                continue
            details = xpath(model, SCORE_MODEL_DETAIL_PATH, model_name=model_name)
            if details:
                return (
                    descendant_text(details[0], "CreditScoreMaximumValue") or "",
                    descendant_text(details[0], "CreditScoreMinimumValue") or "",
                )
        return "", ""

    def _parse_score(self, score_label: str) -> CreditScore:
        file_labels = self._graph.targets(CREDIT_SCORE_TO_CREDIT_FILE, score_label)
        if not file_labels:
            raise GraphResolutionError(f"Credit score {score_label} is not linked to a credit file")
        file_label = file_labels[0]

        score_node = self._graph.element("CREDIT_SCORE", score_label)
        if score_node is None:
            raise GraphResolutionError(f"No CREDIT_SCORE element labeled {score_label}")

        model_name = descendant_text(score_node, "CreditScoreModelNameType") or ""
        if model_name == "Other":
            model_name = descendant_text(score_node, "CreditScoreModelNameTypeOtherDescription") or ""

        factors = [
            ScoreFactor(
                code=descendant_text(factor, "CreditScoreFactorCode") or "",
                text=descendant_text(factor, "CreditScoreFactorText") or "",
            )
            for factor in xpath(score_node, "P1:CREDIT_SCORE_FACTORS/P1:CREDIT_SCORE_FACTOR")
        ]
        maximum, minimum = self._score_range(file_label, model_name)

        return CreditScore(
            bureau_name=self._source_type(self._credit_file(file_label)),
            date_generated=descendant_text(score_node, "CreditScoreDate") or "",
            maximum_value=maximum,
            minimum_value=minimum,
            model_name=model_name,
            percentile_rank=descendant_text(score_node, "CreditScoreRankPercentileValue") or "",
            score_factors=factors,
            score_value=descendant_text(score_node, "CreditScoreValue") or "",
        )

    def get_credit_scores(self, person: PersonKey) -> List[CreditScore]:
        """All scores linked to the person's role, with bureau name and model range resolved."""
        person, role_label = self._require_person(person)
        return self._cached(
            "credit_scores", person,
            lambda: [
                self._parse_score(score_label)
                for score_label in self._graph.sources(CREDIT_SCORE_TO_ROLE, role_label)
            ],
        )

    # -------------------------------------------------------------------------
    # Liabilities
    # -------------------------------------------------------------------------

    @staticmethod
    def parse_liability(liability: etree._Element) -> Liability:
        values = {}
        for f in fields(Liability):
            element = f.metadata["element"]
            if element is None:
                continue
            values[f.name] = descendant_text(liability, element) or ""
        values["account_remarks"] = first_text(liability, BUREAU_REMARKS_PATH) or ""
        return Liability(**values)

    def get_liabilities(self, person: Optional[PersonKey] = None) -> List[Liability]:
        """Liabilities linked to the person's role, or every liability when no person is given."""
        if person is None:
            return self._cached(
                "liabilities", None,
                lambda: [self.parse_liability(node) for node in xpath(self._root, ALL_LIABILITIES_PATH)],
            )

        person, role_label = self._require_person(person)

        def compute() -> List[Liability]:
            liabilities = []
            for label in self._graph.sources(CREDIT_LIABILITY_TO_ROLE, role_label):
                node = self._graph.element("CREDIT_LIABILITY", label)
                if node is None:
                    logger.warning(f"Relationship points to missing CREDIT_LIABILITY {label}")
                    continue
                liabilities.append(self.parse_liability(node))
            return liabilities

        return self._cached("liabilities", person, compute)

    # -------------------------------------------------------------------------
    # Rating codes
    # -------------------------------------------------------------------------

    @staticmethod
    def get_rating_text(code: str, suppress_invalid: bool = False) -> str:
        """Map a current rating code to its rating text.

        Unknown codes raise InvalidRatingCodeError, or return an empty
        string when suppress_invalid is set.
        """
        text = RATING_TEXT.get((code or "").strip().upper())
        if text is not None:
            return text
        if suppress_invalid:
            return ""
        raise InvalidRatingCodeError(code)


def load_response(xml_response: Union[str, bytes]) -> ConsumerCreditResponseParser:
    """Parse a consumer credit response document."""
    return ConsumerCreditResponseParser(xml_response)
