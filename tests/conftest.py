"""
Shared fixtures: request contexts and SmartAPI response documents.
"""

import pytest

from smartapi_helper.models import ConsumerCreditRequestData, RequestKind
from smartapi_helper.services.ancillary import Address, PersonName


MISMO_NS = "http://www.mismo.org/residential/2009/schemas"
NAMESPACES = {
    "m": MISMO_NS,
    "P2": "http://www.w3.org/1999/xlink",
    "P3": "inetapi/MISMO3_4_MCL_Extension.xsd",
}

ARC = "urn:fdc:Meridianlink.com:2017:mortgage/"


# =============================================================================
# REQUEST FIXTURES
# =============================================================================

@pytest.fixture
def borrower_address():
    return Address("123 Main St.", "Santa Ana", "CA", "92626")


@pytest.fixture
def submit_data(borrower_address):
    """Request context with only the fields Submit requires."""
    data = ConsumerCreditRequestData()
    data.set_name("b", PersonName("Alice", "Firstimer"))
    data.set_ssn("b", "000000001")
    data.set_address("b", borrower_address)
    data.set_request_type(RequestKind.SUBMIT)
    return data


# =============================================================================
# RESPONSE DOCUMENTS
# =============================================================================

def _relationship(edge, from_label, to_label):
    return f'<RELATIONSHIP P2:arcrole="{ARC}{edge}" P2:from="{from_label}" P2:to="{to_label}"/>'


def _credit_file(label, source_type, result="FileReturned", error=""):
    error_block = f"<CreditErrorMessageText>{error}</CreditErrorMessageText>" if error else ""
    return (
        f'<CREDIT_FILE P2:label="{label}">'
        f"<CREDIT_ERROR_MESSAGES><CREDIT_ERROR_MESSAGE>{error_block}</CREDIT_ERROR_MESSAGE></CREDIT_ERROR_MESSAGES>"
        f"<CREDIT_FILE_DETAIL><CreditFileResultStatusType>{result}</CreditFileResultStatusType>"
        f"<CreditRepositorySourceType>{source_type}</CreditRepositorySourceType></CREDIT_FILE_DETAIL>"
        "</CREDIT_FILE>"
    )


def _role(label, classification):
    return (
        "<PARTY><ROLES>"
        f'<ROLE P2:label="{label}"><BORROWER><BORROWER_DETAIL>'
        f"<BorrowerClassificationType>{classification}</BorrowerClassificationType>"
        "</BORROWER_DETAIL></BORROWER></ROLE>"
        "</ROLES></PARTY>"
    )


def _score_model(label, name, maximum, minimum, other_description=""):
    other = (
        f"<CreditScoreModelNameTypeOtherDescription>{other_description}</CreditScoreModelNameTypeOtherDescription>"
        if other_description else ""
    )
    return (
        f'<CREDIT_SCORE_MODEL P2:label="{label}"><CREDIT_SCORE_MODEL_DETAIL>'
        f"<CreditScoreMaximumValue>{maximum}</CreditScoreMaximumValue>"
        f"<CreditScoreMinimumValue>{minimum}</CreditScoreMinimumValue>"
        f"<CreditScoreModelNameType>{name}</CreditScoreModelNameType>{other}"
        "</CREDIT_SCORE_MODEL_DETAIL></CREDIT_SCORE_MODEL>"
    )


def _score(label, name, value, date, other_description="", factors=()):
    other = (
        f"<CreditScoreModelNameTypeOtherDescription>{other_description}</CreditScoreModelNameTypeOtherDescription>"
        if other_description else ""
    )
    factor_xml = "".join(
        "<CREDIT_SCORE_FACTOR>"
        f"<CreditScoreFactorCode>{code}</CreditScoreFactorCode>"
        f"<CreditScoreFactorText>{text}</CreditScoreFactorText>"
        "</CREDIT_SCORE_FACTOR>"
        for code, text in factors
    )
    return (
        f'<CREDIT_SCORE P2:label="{label}">'
        f"<CREDIT_SCORE_FACTORS>{factor_xml}</CREDIT_SCORE_FACTORS>"
        "<CREDIT_SCORE_DETAIL>"
        f"<CreditScoreDate>{date}</CreditScoreDate>"
        f"<CreditScoreModelNameType>{name}</CreditScoreModelNameType>{other}"
        "<CreditScoreRankPercentileValue>42</CreditScoreRankPercentileValue>"
        f"<CreditScoreValue>{value}</CreditScoreValue>"
        "</CREDIT_SCORE_DETAIL></CREDIT_SCORE>"
    )


def _liability(label, creditor, account, rating_code="C", balance="1500"):
    return (
        f'<CREDIT_LIABILITY P2:label="{label}">'
        "<CREDIT_COMMENTS>"
        "<CREDIT_COMMENT><CreditCommentSourceType>Equifax</CreditCommentSourceType>"
        "<CreditCommentText>Bureau specific remark</CreditCommentText></CREDIT_COMMENT>"
        "<CREDIT_COMMENT><CreditCommentSourceType>CreditBureau</CreditCommentSourceType>"
        "<CreditCommentText>Account closed by credit grantor</CreditCommentText></CREDIT_COMMENT>"
        "</CREDIT_COMMENTS>"
        "<CREDIT_LIABILITY_ACCOUNT_IDENTIFIER>"
        f"<CreditLiabilityAccountIdentifier>{account}</CreditLiabilityAccountIdentifier>"
        "</CREDIT_LIABILITY_ACCOUNT_IDENTIFIER>"
        "<CREDIT_LIABILITY_CREDITOR>"
        "<ADDRESS><AddressLineText>PO Box 100</AddressLineText><CityName>Wilmington</CityName>"
        "<PostalCode>19801</PostalCode><StateCode>DE</StateCode></ADDRESS>"
        "<CONTACT_POINTS><CONTACT_POINT><CONTACT_POINT_TELEPHONE>"
        "<ContactPointTelephoneValue>8005551212</ContactPointTelephoneValue>"
        "</CONTACT_POINT_TELEPHONE></CONTACT_POINT></CONTACT_POINTS>"
        f"<NAME><FullName>{creditor}</FullName></NAME>"
        "</CREDIT_LIABILITY_CREDITOR>"
        "<CREDIT_LIABILITY_CURRENT_RATING>"
        f"<CreditLiabilityCurrentRatingCode>{rating_code}</CreditLiabilityCurrentRatingCode>"
        "<CreditLiabilityCurrentRatingType>AsAgreed</CreditLiabilityCurrentRatingType>"
        "</CREDIT_LIABILITY_CURRENT_RATING>"
        "<CREDIT_LIABILITY_DETAIL>"
        "<CreditLiabilityAccountType>Revolving</CreditLiabilityAccountType>"
        f"<CreditLiabilityUnpaidBalanceAmount>{balance}</CreditLiabilityUnpaidBalanceAmount>"
        "</CREDIT_LIABILITY_DETAIL>"
        "</CREDIT_LIABILITY>"
    )


def credit_response_xml(
    status="Completed",
    status_description="Order is complete",
    borrower=True,
    coborrower=False,
    request_error=None,
    vendor_order_id="ORD-42",
    include_status=True,
    extra_relationships="",
):
    """Build a consumer credit response document.

    Borrower (Party1_Role) has bureau files CF1/CF2/CF3 (Equifax, Experian,
    TransUnion) and a manually merged file CF4, scores S1 (Equifax, Beacon)
    and S2 (Experian, Other/VantageScore3.0), and liability L1. The
    co-borrower (Party2_Role) has file CF5 and liability L2.
    """
    roles, files, relationships, liabilities = [], [], [], []
    models, scores = [], []

    if borrower:
        roles.append(_role("Party1_Role", "Primary"))
        files += [
            _credit_file("CF1", "Equifax"),
            _credit_file("CF2", "Experian", result="NoFileReturned", error="Subject not found"),
            _credit_file("CF3", "TransUnion"),
            _credit_file("CF4", "Other"),
        ]
        relationships += [
            _relationship("CREDIT_FILE_IsAssociatedWith_ROLE", label, "Party1_Role")
            for label in ("CF1", "CF2", "CF3", "CF4")
        ]
        models += [
            _score_model("M1", "EquifaxBeacon5.0", "818", "334"),
            _score_model("M2", "Other", "850", "300", other_description="VantageScore3.0"),
            _score_model("M3", "EquifaxBeacon5.0", "999", "1"),
        ]
        scores += [
            _score(
                "S1", "EquifaxBeacon5.0", "720", "2024-01-15",
                factors=[("00034", "Total of all balances on bankcard accounts is too high"),
                         ("00010", "Ratio of balance to limit on bank revolving accounts too high")],
            ),
            _score("S2", "Other", "701", "2024-01-16", other_description="VantageScore3.0"),
        ]
        relationships += [
            _relationship("CREDIT_SCORE_IsAssociatedWith_ROLE", "S1", "Party1_Role"),
            _relationship("CREDIT_SCORE_IsAssociatedWith_ROLE", "S2", "Party1_Role"),
            _relationship("CREDIT_FILE_IsAssociatedWith_CREDIT_SCORE", "S1", "CF1"),
            _relationship("CREDIT_FILE_IsAssociatedWith_CREDIT_SCORE", "S2", "CF2"),
            _relationship("CREDIT_FILE_IsAssociatedWith_CREDIT_SCORE_MODEL", "M1", "CF1"),
            _relationship("CREDIT_FILE_IsAssociatedWith_CREDIT_SCORE_MODEL", "M3", "CF1"),
            _relationship("CREDIT_FILE_IsAssociatedWith_CREDIT_SCORE_MODEL", "M2", "CF2"),
            _relationship("CREDIT_LIABILITY_IsAssociatedWith_ROLE", "L1", "Party1_Role"),
        ]
        liabilities.append(_liability("L1", "ACME BANK", "4111XXXX", rating_code="1"))

    if coborrower:
        roles.append(_role("Party2_Role", "Secondary"))
        files.append(_credit_file("CF5", "Equifax"))
        relationships += [
            _relationship("CREDIT_FILE_IsAssociatedWith_ROLE", "CF5", "Party2_Role"),
            _relationship("CREDIT_LIABILITY_IsAssociatedWith_ROLE", "L2", "Party2_Role"),
        ]
        liabilities.append(_liability("L2", "AUTO FINANCE CO", "9876XXXX", balance="12000"))

    error_block = ""
    if request_error is not None:
        category, text = request_error
        error_block = (
            "<DEAL_SET_SERVICES><DEAL_SET_SERVICE><ERRORS><ERROR><ERROR_MESSAGES><ERROR_MESSAGE>"
            f"<ErrorMessageCategoryCode>{category}</ErrorMessageCategoryCode>"
            f"<ErrorMessageText>{text}</ErrorMessageText>"
            "</ERROR_MESSAGE></ERROR_MESSAGES></ERROR></ERRORS></DEAL_SET_SERVICE></DEAL_SET_SERVICES>"
        )

    status_block = ""
    if include_status:
        status_block = (
            "<STATUSES><STATUS>"
            f"<StatusCode>{status}</StatusCode>"
            f"<StatusDescription>{status_description}</StatusDescription>"
            "</STATUS></STATUSES>"
        )

    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<MESSAGE xmlns="{MISMO_NS}" xmlns:P2="{NAMESPACES["P2"]}" '
        f'xmlns:P3="{NAMESPACES["P3"]}" MessageType="Response">'
        "<DOCUMENT_SETS><DOCUMENT_SET><DOCUMENTS><DOCUMENT><VIEWS><VIEW><VIEW_FILES>"
        "<VIEW_FILE><FOREIGN_OBJECT><EmbeddedContentXML>&lt;html&gt;report&lt;/html&gt;</EmbeddedContentXML>"
        "<MIMETypeIdentifier>text/html</MIMETypeIdentifier></FOREIGN_OBJECT></VIEW_FILE>"
        "<VIEW_FILE><FOREIGN_OBJECT><EmbeddedContentXML>JVBERi0xLjQK</EmbeddedContentXML>"
        "<MIMETypeIdentifier>application/pdf</MIMETypeIdentifier></FOREIGN_OBJECT></VIEW_FILE>"
        "</VIEW_FILES></VIEW></VIEWS></DOCUMENT></DOCUMENTS></DOCUMENT_SET></DOCUMENT_SETS>"
        "<DEAL_SETS>"
        f"{error_block}"
        "<DEAL_SET><DEALS><DEAL>"
        "<PARTIES><PARTY><ROLES><ROLE><RESPONDING_PARTY>"
        "<RespondingPartyTransactionIdentifier>TX-2024-0001</RespondingPartyTransactionIdentifier>"
        "</RESPONDING_PARTY></ROLE></ROLES></PARTY></PARTIES>"
        '<SERVICES><SERVICE P2:label="Service1">'
        "<CREDIT><CREDIT_RESPONSE>"
        f"<CREDIT_FILES>{''.join(files)}</CREDIT_FILES>"
        f"<CREDIT_LIABILITIES>{''.join(liabilities)}</CREDIT_LIABILITIES>"
        f"<CREDIT_SCORE_MODELS>{''.join(models)}</CREDIT_SCORE_MODELS>"
        f"<CREDIT_SCORES>{''.join(scores)}</CREDIT_SCORES>"
        f"<PARTIES>{''.join(roles)}</PARTIES>"
        "</CREDIT_RESPONSE></CREDIT>"
        f"<RELATIONSHIPS>{''.join(relationships)}{extra_relationships}</RELATIONSHIPS>"
        "<SERVICE_PRODUCT_FULFILLMENT><SERVICE_PRODUCT_FULFILLMENT_DETAIL>"
        f"<VendorOrderIdentifier>{vendor_order_id}</VendorOrderIdentifier>"
        "</SERVICE_PRODUCT_FULFILLMENT_DETAIL></SERVICE_PRODUCT_FULFILLMENT>"
        f"{status_block}"
        "</SERVICE></SERVICES>"
        "</DEAL></DEALS></DEAL_SET>"
        "</DEAL_SETS>"
        "</MESSAGE>"
    )


@pytest.fixture
def make_response():
    """Factory for response documents; see credit_response_xml for the layout."""
    return credit_response_xml


@pytest.fixture
def completed_response():
    return credit_response_xml(coborrower=True)
