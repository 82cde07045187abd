"""
One document builder per request kind.

Builders assume the required-field table has already been checked, so every
mandatory value they read is present.
"""
from __future__ import annotations
from typing import Callable, Dict

from lxml import etree

from ...models.request_data import ConsumerCreditRequestData
from ...models.wire import Person, RequestKind
from . import skeleton
from ..document import sub


Builder = Callable[[ConsumerCreditRequestData], etree._Element]


def _build_full_order(data: ConsumerCreditRequestData, kind: RequestKind) -> etree._Element:
    """Submit and Refresh share the full borrower layout."""
    root, deal = skeleton.start_document(data)
    skeleton.add_collateral(deal, data)
    skeleton.add_loan(deal, data)

    parties = sub(deal, "PARTIES")
    for person in skeleton.present_people(data):
        skeleton.add_full_party(parties, data, person)
    skeleton.add_relationships(deal, data, with_property=True)

    service = skeleton.start_service(deal)
    skeleton.add_credit_request(
        service, data, kind,
        with_loan_type=kind is RequestKind.SUBMIT,
        with_addons=True,
    )
    skeleton.add_payment(service, data)
    skeleton.add_service_product(service, data)
    if kind is not RequestKind.SUBMIT:
        skeleton.add_fulfillment(service, data)
    return root


def _build_existing_order(data: ConsumerCreditRequestData, kind: RequestKind) -> etree._Element:
    """StatusQuery and PermUnmerge reference an existing file by its vendor order ID."""
    root, deal = skeleton.start_document(data)

    parties = sub(deal, "PARTIES")
    for person in skeleton.present_people(data):
        skeleton.add_brief_party(parties, data, person)
    skeleton.add_relationships(deal, data, with_property=False)

    service = skeleton.start_service(deal)
    skeleton.add_credit_request(service, data, kind)
    skeleton.add_payment(service, data)
    skeleton.add_service_product(service, data)
    skeleton.add_fulfillment(service, data)
    return root


def build_submit(data: ConsumerCreditRequestData) -> etree._Element:
    return _build_full_order(data, RequestKind.SUBMIT)


def build_refresh(data: ConsumerCreditRequestData) -> etree._Element:
    return _build_full_order(data, RequestKind.REFRESH)


def build_status_query(data: ConsumerCreditRequestData) -> etree._Element:
    return _build_existing_order(data, RequestKind.STATUS_QUERY)


def build_perm_unmerge(data: ConsumerCreditRequestData) -> etree._Element:
    return _build_existing_order(data, RequestKind.PERM_UNMERGE)


def build_upgrade(data: ConsumerCreditRequestData) -> etree._Element:
    """
    Upgrade an existing file with additional bureaus or a co-borrower.

    The borrower is referenced briefly; an added co-borrower also carries
    contact points and birth date. Bureau add-on switches are included.
    """
    root, deal = skeleton.start_document(data)

    parties = sub(deal, "PARTIES")
    for person in skeleton.present_people(data):
        is_added_person = person is Person.CO_BORROWER
        skeleton.add_brief_party(
            parties, data, person,
            with_contacts=is_added_person,
            with_dob=is_added_person,
        )
    skeleton.add_relationships(deal, data, with_property=False)

    service = skeleton.start_service(deal)
    skeleton.add_credit_request(service, data, RequestKind.UPGRADE, with_addons=True)
    skeleton.add_payment(service, data)
    skeleton.add_service_product(service, data)
    skeleton.add_fulfillment(service, data)
    return root


BUILDERS: Dict[RequestKind, Builder] = {
    RequestKind.SUBMIT: build_submit,
    RequestKind.STATUS_QUERY: build_status_query,
    RequestKind.UPGRADE: build_upgrade,
    RequestKind.REFRESH: build_refresh,
    RequestKind.PERM_UNMERGE: build_perm_unmerge,
}
