"""
Tests for the field value objects: Address, PersonName, PhoneNumber,
CreditCard and ResponseFormats.
"""

import pytest

from smartapi_helper.exceptions import InvalidFieldError, MissingFieldError, ValidationError
from smartapi_helper.services.ancillary import (
    Address,
    CreditCard,
    PersonName,
    PhoneNumber,
    ResponseFormats,
    luhn_valid,
)
from smartapi_helper.services.document import MCL_EXTENSION_NS, MISMO_NS, qname


def child_text(element, tag, namespace=MISMO_NS):
    return element.findtext(qname(tag, namespace))


# =============================================================================
# ADDRESS
# =============================================================================

class TestAddress:
    """Tests for address validation and normalization."""

    def test_normalizes_fields(self):
        address = Address("  123 Main St. ", " Santa Ana ", "ca", "92626", "us")
        assert address.street == "123 Main St."
        assert address.city == "Santa Ana"
        assert address.state == "CA"
        assert address.country == "US"

    def test_zip_plus_four_truncated(self):
        assert Address("1 Elm St", "Austin", "TX", "78701-1234").zip_code == "78701"

    def test_canadian_postal_code(self):
        address = Address("10 King St", "Toronto", "ON", "m5h 2n2", "CA")
        assert address.zip_code == "M5H2N2"

    @pytest.mark.parametrize("kwargs,field", [
        ({"street": ""}, "street"),
        ({"city": " "}, "city"),
        ({"state": ""}, "state"),
        ({"zip_code": ""}, "zip code"),
    ])
    def test_missing_fields(self, kwargs, field):
        values = {"street": "1 Elm St", "city": "Austin", "state": "TX", "zip_code": "78701"}
        values.update(kwargs)
        with pytest.raises(MissingFieldError) as exc_info:
            Address(**values)
        assert exc_info.value.field == field

    @pytest.mark.parametrize("kwargs", [
        {"street": "1 Elm St; DROP"},
        {"state": "ZZ"},
        {"zip_code": "7870"},
        {"country": "MX"},
    ])
    def test_invalid_fields(self, kwargs):
        values = {"street": "1 Elm St", "city": "Austin", "state": "TX", "zip_code": "78701"}
        values.update(kwargs)
        with pytest.raises(InvalidFieldError):
            Address(**values)

    def test_to_xml(self):
        element = Address("1 Elm St", "Austin", "TX", "78701").to_xml()
        assert element.tag == qname("ADDRESS")
        assert child_text(element, "AddressLineText") == "1 Elm St"
        assert child_text(element, "CityName") == "Austin"
        assert child_text(element, "CountryCode") == "US"
        assert child_text(element, "PostalCode") == "78701"
        assert child_text(element, "StateCode") == "TX"


# =============================================================================
# PERSON NAME
# =============================================================================

class TestPersonName:
    """Tests for person name validation."""

    def test_optional_parts(self):
        name = PersonName("John", "Smith", middle="Q", suffix="jr")
        assert name.suffix == "JR"

        element = name.to_xml()
        assert child_text(element, "FirstName") == "John"
        assert child_text(element, "MiddleName") == "Q"
        assert child_text(element, "SuffixName") == "JR"

    def test_optional_parts_omitted(self):
        element = PersonName("John", "Smith").to_xml()
        assert element.find(qname("MiddleName")) is None
        assert element.find(qname("SuffixName")) is None

    def test_missing_last_name(self):
        with pytest.raises(MissingFieldError):
            PersonName("John", "")

    def test_invalid_characters(self):
        with pytest.raises(InvalidFieldError):
            PersonName("J0hn", "Smith")

    def test_invalid_suffix(self):
        with pytest.raises(InvalidFieldError):
            PersonName("John", "Smith", suffix="ESQ")


# =============================================================================
# PHONE NUMBER
# =============================================================================

class TestPhoneNumber:
    """Tests for phone number validation."""

    @pytest.mark.parametrize("raw", ["7145551234", "714-555-1234", "(714) 555-1234", "714.555.1234"])
    def test_formats_reduced_to_digits(self, raw):
        assert PhoneNumber(raw).number == "7145551234"

    def test_type_capitalized(self):
        assert PhoneNumber("7145551234", type="mobile").type == "Mobile"

    def test_invalid_number(self):
        with pytest.raises(InvalidFieldError):
            PhoneNumber("555-1234")

    def test_invalid_extension(self):
        with pytest.raises(InvalidFieldError):
            PhoneNumber("7145551234", extension="x12")

    def test_invalid_type(self):
        with pytest.raises(InvalidFieldError):
            PhoneNumber("7145551234", type="Pager")

    def test_to_xml(self):
        element = PhoneNumber("7145551234", extension="22", type="Work").to_xml()
        telephone = element.find(qname("CONTACT_POINT_TELEPHONE"))
        assert child_text(telephone, "ContactPointTelephoneValue") == "7145551234"
        assert child_text(telephone, "ContactPointTelephoneExtensionValue") == "22"
        detail = element.find(qname("CONTACT_POINT_DETAIL"))
        assert child_text(detail, "ContactPointRoleType") == "Work"


# =============================================================================
# CREDIT CARD
# =============================================================================

class TestCreditCard:
    """Tests for payment card validation."""

    @pytest.fixture
    def holder(self):
        return PersonName("Alice", "Firstimer"), Address("1 Elm St", "Austin", "TX", "78701")

    def test_luhn(self):
        assert luhn_valid("4111111111111111")
        assert not luhn_valid("4111111111111112")
        assert not luhn_valid("4111-1111")

    def test_expiration_date(self, holder):
        name, address = holder
        card = CreditCard(name, address, "4111111111111111", 3, "2030", cvv="123")
        assert card.exp_month == "03"
        assert card.expiration_date == "2030-03"

    def test_bad_number(self, holder):
        name, address = holder
        with pytest.raises(InvalidFieldError):
            CreditCard(name, address, "4111111111111112", 3, 2030)

    @pytest.mark.parametrize("month,year", [(13, 2030), (0, 2030), (3, 30)])
    def test_bad_expiration(self, holder, month, year):
        name, address = holder
        with pytest.raises(ValidationError):
            CreditCard(name, address, "4111111111111111", month, year)

    def test_to_xml(self, holder):
        name, address = holder
        element = CreditCard(name, address, "4111111111111111", 12, 2030, cvv="999").to_xml()

        assert element.tag == qname("SERVICE_PAYMENT")
        assert element.find(qname("ADDRESS")) is not None
        assert element.find(qname("NAME")) is not None
        detail = element.find(qname("SERVICE_PAYMENT_DETAIL"))
        assert child_text(detail, "ServicePaymentAccountIdentifier") == "4111111111111111"
        assert child_text(detail, "ServicePaymentCreditAccountExpirationDate") == "2030-12"
        assert child_text(detail, "ServicePaymentSecondaryCreditAccountIdentifier") == "999"


# =============================================================================
# RESPONSE FORMATS
# =============================================================================

class TestResponseFormats:
    """Tests for preferred response format selection."""

    def test_defaults(self):
        formats = ResponseFormats()
        assert formats.formats == ["Xml", "Html", "Pdf"]
        assert formats.count == 3

    def test_toggle_and_custom(self):
        formats = ResponseFormats()
        formats.set_html(False)
        formats.set_custom_format("Mismo23", True)

        assert formats.formats == ["Xml", "Pdf", "Mismo23"]
        assert formats.all_formats["Html"] is False

    def test_custom_cannot_shadow_predefined(self):
        with pytest.raises(InvalidFieldError):
            ResponseFormats().set_custom_format("pdf", True)

    def test_equality(self):
        assert ResponseFormats() == ResponseFormats()
        assert ResponseFormats(pdf=False) != ResponseFormats()

    def test_to_xml_uses_extension_namespace(self):
        element = ResponseFormats(xml=True, html=False, pdf=False).to_xml()
        assert element.tag == qname("SERVICE_PREFERRED_RESPONSE_FORMATS", MCL_EXTENSION_NS)
        values = element.xpath(".//*[local-name() = 'PreferredResponseFormatType']/text()")
        assert values == ["Xml"]
