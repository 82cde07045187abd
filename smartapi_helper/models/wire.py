"""
SmartAPI Helper - Wire Models

Enums for the closed value sets of the SmartAPI protocol and the result
records produced by the response parser. Result records expose to_dict()
with the vendor's element-style keys.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List

from ..exceptions import InvalidFieldError, InvalidPersonError


# =============================================================================
# ENUMS
# =============================================================================

class RequestKind(str, Enum):
    """The five request document shapes."""
    SUBMIT = "Submit"
    STATUS_QUERY = "StatusQuery"
    UPGRADE = "Upgrade"
    REFRESH = "Refresh"
    PERM_UNMERGE = "PermUnmerge"

    @classmethod
    def parse(cls, value: Any) -> "RequestKind":
        """Accept an enum member or its name in any letter case."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for kind in cls:
            if kind.value.lower() == text:
                return kind
        valid = ", ".join(kind.value for kind in cls)
        raise InvalidFieldError("request type", f"must be one of: {valid}")


class Person(str, Enum):
    """Person slots shared by request data and response lookups."""
    BORROWER = "b"
    CO_BORROWER = "c"

    @classmethod
    def parse(cls, value: Any) -> "Person":
        if isinstance(value, cls):
            return value
        for person in cls:
            if person.value == value:
                return person
        raise InvalidPersonError(str(value))

    @property
    def classification(self) -> str:
        """BorrowerClassificationType used for this slot in response documents."""
        return "Primary" if self is Person.BORROWER else "Secondary"

    @property
    def sequence_number(self) -> str:
        return "1" if self is Person.BORROWER else "2"

    @property
    def party_label(self) -> str:
        return f"Party{self.sequence_number}"


class AddressType(str, Enum):
    CURRENT = "Current"
    PRIOR = "Prior"
    MAILING = "Mailing"

    @classmethod
    def parse(cls, value: Any) -> "AddressType":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for address_type in cls:
            if address_type.value.lower() == text:
                return address_type
        raise InvalidFieldError("address type", "must be Current, Prior or Mailing")


class ResponseStatus(str, Enum):
    """Order status reported by the vendor."""
    REQUEST_ERROR = "REQUEST_ERROR"
    SERVICE_ERROR = "SERVICE_ERROR"
    NEW = "NEW"
    PROCESSING = "PROCESSING"
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"

    @property
    def is_terminal(self) -> bool:
        """True when no further status polling will change the outcome."""
        return self in _TERMINAL_STATUSES


_TERMINAL_STATUSES = {
    ResponseStatus.REQUEST_ERROR,
    ResponseStatus.SERVICE_ERROR,
    ResponseStatus.COMPLETED,
    ResponseStatus.ERROR,
}


# =============================================================================
# RESULT RECORDS
# =============================================================================

@dataclass
class BureauResponse:
    """Outcome of one repository's portion of the order."""
    bureau_name: str = ""
    result: str = ""
    error_description: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "BureauName": self.bureau_name,
            "Result": self.result,
            "ErrorDescription": self.error_description,
        }


@dataclass
class ScoreFactor:
    code: str = ""
    text: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"Code": self.code, "Text": self.text}


@dataclass
class CreditScore:
    bureau_name: str = ""
    date_generated: str = ""
    maximum_value: str = ""
    minimum_value: str = ""
    model_name: str = ""
    percentile_rank: str = ""
    score_factors: List[ScoreFactor] = field(default_factory=list)
    score_value: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with vendor-style keys."""
        return {
            "BureauName": self.bureau_name,
            "DateGenerated": self.date_generated,
            "MaximumValue": self.maximum_value,
            "MinimumValue": self.minimum_value,
            "ModelName": self.model_name,
            "PercentileRank": self.percentile_rank,
            "ScoreFactors": [factor.to_dict() for factor in self.score_factors],
            "ScoreValue": self.score_value,
        }


def _liability_field(key: str, element: str = None):
    """Liability attribute with its dict key and source element local name."""
    return field(default="", metadata={"key": key, "element": element or key})


@dataclass
class Liability:
    """
    One tradeline from CREDIT_LIABILITIES.

    Each attribute reads the first descendant element named in its metadata;
    attributes whose element is absent stay empty (e.g. an auto loan has no
    credit limit).
    """
    full_name: str = _liability_field("FullName")
    account_identifier: str = _liability_field("CreditLiabilityAccountIdentifier")
    account_type: str = _liability_field("CreditLiabilityAccountType")
    unpaid_balance_amount: str = _liability_field("CreditLiabilityUnpaidBalanceAmount")
    current_rating_code: str = _liability_field("CreditLiabilityCurrentRatingCode")
    current_rating_type: str = _liability_field("CreditLiabilityCurrentRatingType")
    monthly_payment_amount: str = _liability_field("CreditLiabilityMonthlyPaymentAmount")
    account_ownership_type: str = _liability_field("CreditLiabilityAccountOwnershipType")
    # Read from the CreditBureau comment, not a single element
    account_remarks: str = field(default="", metadata={"key": "AccountRemarks", "element": None})
    credit_business_type: str = _liability_field("CreditBusinessType")
    detail_credit_business_type: str = _liability_field("DetailCreditBusinessType")
    credit_loan_type: str = _liability_field("CreditLoanType")
    days_late_30_count: str = _liability_field("CreditLiability30DaysLateCount")
    days_late_60_count: str = _liability_field("CreditLiability60DaysLateCount")
    days_late_90_count: str = _liability_field("CreditLiability90DaysLateCount")
    account_opened_date: str = _liability_field("CreditLiabilityAccountOpenedDate")
    account_closed_date: str = _liability_field("CreditLiabilityAccountClosedDate")
    account_paid_date: str = _liability_field("CreditLiabilityAccountPaidDate")
    account_reported_date: str = _liability_field("CreditLiabilityAccountReportedDate")
    account_status_type: str = _liability_field("CreditLiabilityAccountStatusType")
    credit_limit_amount: str = _liability_field("CreditLiabilityCreditLimitAmount")
    high_balance_amount: str = _liability_field("CreditLiabilityHighBalanceAmount")
    highest_adverse_rating_date: str = _liability_field("CreditLiabilityHighestAdverseRatingDate")
    highest_adverse_rating_code: str = _liability_field("CreditLiabilityHighestAdverseRatingCode")
    highest_adverse_rating_type: str = _liability_field("CreditLiabilityHighestAdverseRatingType")
    last_activity_date: str = _liability_field("CreditLiabilityLastActivityDate")
    months_remaining_count: str = _liability_field("CreditLiabilityMonthsRemainingCount")
    months_reviewed_count: str = _liability_field("CreditLiabilityMonthsReviewedCount")
    past_due_amount: str = _liability_field("CreditLiabilityPastDueAmount")
    payment_pattern_data_text: str = _liability_field("CreditLiabilityPaymentPatternDataText")
    payment_pattern_start_date: str = _liability_field("CreditLiabilityPaymentPatternStartDate")
    terms_description: str = _liability_field("CreditLiabilityTermsDescription")
    terms_months_count: str = _liability_field("CreditLiabilityTermsMonthsCount")
    terms_source_type: str = _liability_field("CreditLiabilityTermsSourceType")
    creditor_address_street: str = _liability_field("CreditorAddressStreet", "AddressLineText")
    creditor_address_city: str = _liability_field("CreditorAddressCity", "CityName")
    creditor_address_state: str = _liability_field("CreditorAddressState", "StateCode")
    creditor_address_zip: str = _liability_field("CreditorAddressZip", "PostalCode")
    contact_point_telephone_value: str = _liability_field("ContactPointTelephoneValue")

    def to_dict(self) -> Dict[str, str]:
        return {f.metadata["key"]: getattr(self, f.name) for f in fields(self)}
