"""
Shared building blocks for request documents.

Every request kind is assembled from these helpers; the per-kind builders
only decide which blocks appear and in what form.
"""
from __future__ import annotations
from typing import List, Tuple

from lxml import etree

from ...models.request_data import ConsumerCreditRequestData, PersonData
from ...models.wire import AddressType, Person, RequestKind
from ..document import (
    MCL_EXTENSION_NS,
    arcrole,
    bool_text,
    new_request_root,
    path,
    qname,
    sub,
    xlink,
)


SERVICE_LABEL = "Service1"
PROPERTY_LABEL = "Property1"


# =============================================================================
# DOCUMENT FRAME
# =============================================================================

def start_document(data: ConsumerCreditRequestData) -> Tuple[etree._Element, etree._Element]:
    """Create MESSAGE with its version block and return (root, DEAL)."""
    root = new_request_root()
    path(root, "ABOUT_VERSIONS", "ABOUT_VERSION", "DataVersionIdentifier").text = data.data_version
    deal = path(root, "DEAL_SETS", "DEAL_SET", "DEALS", "DEAL")
    return root, deal


def add_collateral(deal: etree._Element, data: ConsumerCreditRequestData) -> None:
    if data.subject_property is None:
        return
    subject_property = path(deal, "COLLATERALS", "COLLATERAL", "SUBJECT_PROPERTY")
    subject_property.set(xlink("label"), PROPERTY_LABEL)
    subject_property.append(data.subject_property.to_xml())


def add_loan(deal: etree._Element, data: ConsumerCreditRequestData) -> None:
    if not data.loan_id:
        return
    path(deal, "LOANS", "LOAN", "LOAN_IDENTIFIERS", "LOAN_IDENTIFIER", "LoanIdentifier").text = data.loan_id


# =============================================================================
# PARTIES
# =============================================================================

def start_party(parties: etree._Element, person: Person) -> etree._Element:
    party = sub(parties, "PARTY", attrib={"SequenceNumber": person.sequence_number})
    party.set(xlink("label"), person.party_label)
    return party


def add_contact_points(individual: etree._Element, person_data: PersonData) -> None:
    """CONTACT_POINTS with phone then email; omitted when neither is set."""
    if person_data.phone is None and not person_data.email:
        return
    contact_points = sub(individual, "CONTACT_POINTS")
    if person_data.phone is not None:
        contact_points.append(person_data.phone.to_xml())
    if person_data.email:
        path(contact_points, "CONTACT_POINT", "CONTACT_POINT_EMAIL", "ContactPointEmailValue").text = person_data.email


def add_individual(party: etree._Element, person_data: PersonData, with_contacts: bool) -> None:
    individual = sub(party, "INDIVIDUAL")
    if with_contacts:
        add_contact_points(individual, person_data)
    individual.append(person_data.name.to_xml())


def add_mailing_address(party: etree._Element, person_data: PersonData) -> None:
    mailing = person_data.addresses[AddressType.MAILING]
    if mailing is None:
        return
    address = mailing.to_xml()
    address_type = sub(address, "AddressType", AddressType.MAILING.value)
    address.find(qname("CityName")).addprevious(address_type)
    sub(party, "ADDRESSES").append(address)


def add_borrower_detail(borrower: etree._Element, person_data: PersonData) -> None:
    if person_data.dob:
        path(borrower, "BORROWER_DETAIL", "BorrowerBirthDate").text = person_data.dob


def add_residences(borrower: etree._Element, person_data: PersonData) -> None:
    residences = sub(borrower, "RESIDENCES")
    for address_type in (AddressType.CURRENT, AddressType.PRIOR):
        address = person_data.addresses[address_type]
        if address is None:
            continue
        residence = sub(residences, "RESIDENCE")
        residence.append(address.to_xml())
        path(residence, "RESIDENCE_DETAIL", "BorrowerResidencyType").text = address_type.value


def add_role_detail(role: etree._Element) -> None:
    path(role, "ROLE_DETAIL", "PartyRoleType").text = "Borrower"


def add_taxpayer_identifier(party: etree._Element, ssn: str) -> None:
    identifier = path(party, "TAXPAYER_IDENTIFIERS", "TAXPAYER_IDENTIFIER")
    sub(identifier, "TaxpayerIdentifierType", "SocialSecurityNumber")
    sub(identifier, "TaxpayerIdentifierValue", ssn)


def add_full_party(parties: etree._Element, data: ConsumerCreditRequestData, person: Person) -> None:
    """Party with contacts, mailing address, birth date and residences."""
    person_data = data.person(person)
    party = start_party(parties, person)
    add_individual(party, person_data, with_contacts=True)
    add_mailing_address(party, person_data)
    role = path(party, "ROLES", "ROLE")
    borrower = sub(role, "BORROWER")
    add_borrower_detail(borrower, person_data)
    add_residences(borrower, person_data)
    add_role_detail(role)
    add_taxpayer_identifier(party, person_data.ssn)


def add_brief_party(
    parties: etree._Element,
    data: ConsumerCreditRequestData,
    person: Person,
    with_contacts: bool = False,
    with_dob: bool = False,
) -> None:
    """Party with name, role and SSN, optionally carrying contacts and birth date."""
    person_data = data.person(person)
    party = start_party(parties, person)
    add_individual(party, person_data, with_contacts=with_contacts)
    role = path(party, "ROLES", "ROLE")
    if with_dob and person_data.dob:
        add_borrower_detail(sub(role, "BORROWER"), person_data)
    add_role_detail(role)
    add_taxpayer_identifier(party, person_data.ssn)


def present_people(data: ConsumerCreditRequestData) -> List[Person]:
    """Borrower always, co-borrower only when named."""
    people = [Person.BORROWER]
    if data.has_coborrower:
        people.append(Person.CO_BORROWER)
    return people


# =============================================================================
# RELATIONSHIPS
# =============================================================================

def add_relationship(relationships: etree._Element, edge: str, from_label: str, to_label: str) -> None:
    relationship = sub(relationships, "RELATIONSHIP")
    relationship.set(xlink("arcrole"), arcrole(edge))
    relationship.set(xlink("from"), from_label)
    relationship.set(xlink("to"), to_label)


def add_relationships(deal: etree._Element, data: ConsumerCreditRequestData, with_property: bool) -> None:
    relationships = sub(deal, "RELATIONSHIPS")
    for person in present_people(data):
        add_relationship(relationships, "PARTY_IsVerifiedBy_SERVICE", person.party_label, SERVICE_LABEL)
    if with_property and data.subject_property is not None:
        add_relationship(relationships, "PROPERTY_IsVerifiedBy_SERVICE", PROPERTY_LABEL, SERVICE_LABEL)


# =============================================================================
# SERVICE
# =============================================================================

def start_service(deal: etree._Element) -> etree._Element:
    service = path(deal, "SERVICES", "SERVICE")
    service.set(xlink("label"), SERVICE_LABEL)
    return service


def add_credit_request(
    service: etree._Element,
    data: ConsumerCreditRequestData,
    kind: RequestKind,
    with_loan_type: bool = False,
    with_addons: bool = False,
) -> None:
    """CREDIT/CREDIT_REQUEST with repository switches and the action type."""
    credit_request = path(service, "CREDIT", "CREDIT_REQUEST")
    if with_loan_type and data.loan_type:
        detail = path(credit_request, "CREDIT_INQUIRIES", "CREDIT_INQUIRY", "CREDIT_INQUIRY_DETAIL")
        sub(detail, "CreditLoanType", "Other")
        sub(detail, "CreditLoanTypeOtherDescription", data.loan_type)

    request_data = path(credit_request, "CREDIT_REQUEST_DATAS", "CREDIT_REQUEST_DATA")
    included = sub(request_data, "CREDIT_REPOSITORY_INCLUDED")
    sub(included, "CreditRepositoryIncludedEquifaxIndicator", bool_text(data.equifax_options.credit))
    sub(included, "CreditRepositoryIncludedExperianIndicator", bool_text(data.experian_options.credit))
    sub(included, "CreditRepositoryIncludedTransUnionIndicator", bool_text(data.transunion_options.credit))
    if with_addons:
        other = path(included, "EXTENSION", "OTHER")
        addons = [
            ("RequestEquifaxScore", data.equifax_options.score),
            ("RequestExperianFraud", data.experian_options.fraud),
            ("RequestExperianScore", data.experian_options.score),
            ("RequestTransUnionFraud", data.transunion_options.fraud),
            ("RequestTransUnionScore", data.transunion_options.score),
        ]
        for tag, flag in addons:
            sub(other, tag, bool_text(bool(flag)), namespace=MCL_EXTENSION_NS)

    action_detail = sub(request_data, "CREDIT_REQUEST_DATA_DETAIL")
    # Refresh is sent as an "Other" action with the kind in the description
    if kind is RequestKind.REFRESH:
        sub(action_detail, "CreditReportRequestActionType", "Other")
        sub(action_detail, "CreditReportRequestActionTypeOtherDescription", kind.value)
    else:
        sub(action_detail, "CreditReportRequestActionType", kind.value)


def add_payment(service: etree._Element, data: ConsumerCreditRequestData) -> None:
    if data.credit_card is None:
        return
    sub(service, "SERVICE_PAYMENTS").append(data.credit_card.to_xml())


def add_service_product(service: etree._Element, data: ConsumerCreditRequestData) -> None:
    detail = path(service, "SERVICE_PRODUCT", "SERVICE_PRODUCT_REQUEST", "SERVICE_PRODUCT_DETAIL")
    sub(detail, "ServiceProductDescription", "CreditOrder")
    # No formats selected means no container at all, not an empty one
    if data.response_formats.count:
        path(detail, "EXTENSION", "OTHER").append(data.response_formats.to_xml(MCL_EXTENSION_NS))


def add_fulfillment(service: etree._Element, data: ConsumerCreditRequestData) -> None:
    detail = path(service, "SERVICE_PRODUCT_FULFILLMENT", "SERVICE_PRODUCT_FULFILLMENT_DETAIL")
    sub(detail, "VendorOrderIdentifier", data.vendor_order_id)
