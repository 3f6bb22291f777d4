import pytest

from onvifsoap.errors import MalformedXML
from onvifsoap.tree import parse_xml

from _responses import DEVICE_INFORMATION, SOAP12_FAULT, SOAP11_FAULT


def test_paths_use_local_names():
    tree = parse_xml(DEVICE_INFORMATION)
    assert tree.name == "Envelope"
    assert tree.namespace == "http://www.w3.org/2003/05/soap-envelope"
    assert tree.value_for_path("Envelope.Body.GetDeviceInformationResponse.Model") == "CAM-100"


def test_absent_path_is_none():
    tree = parse_xml(DEVICE_INFORMATION)
    assert tree.value_for_path("Envelope.Body.Fault.faultstring") is None
    assert tree.value_for_path("Envelope.Body.Fault.Reason.Text.#text") is None
    assert tree.find("Body.GetDeviceInformationResponse") is None


def test_text_and_attribute_segments():
    tree = parse_xml(SOAP12_FAULT)
    assert tree.value_for_path("Envelope.Body.Fault.Reason.Text.#text") == "Sender not Authorized"
    assert tree.value_for_path("Envelope.Body.Fault.Reason.Text.-lang") == "en"
    assert tree.value_for_path("Envelope.Body.Fault.Reason.Text.-missing") is None
    assert tree.value_for_path("Envelope.Body.Fault.Code.Subcode.Value") == "ter:NotAuthorized"


def test_empty_element_is_present_but_empty():
    tree = parse_xml(b"<a><b/></a>")
    assert tree.value_for_path("a.b") == ""
    assert tree.value_for_path("a.b.#text") == ""
    assert tree.value_for_path("a.c") is None


def test_find_all_returns_repeated_elements():
    tree = parse_xml(b"<r><Profile token='p1'/><Profile token='p2'/><Other/></r>")
    tokens = [node.attributes["token"] for node in tree.find_all("r.Profile")]
    assert tokens == ["p1", "p2"]


def test_to_dict_generic_form():
    tree = parse_xml(SOAP11_FAULT)
    assert tree.to_dict() == {
        "Envelope": {
            "Body": {
                "Fault": {
                    "faultcode": "soap:Client",
                    "faultstring": "Action Not Implemented",
                }
            }
        }
    }


def test_to_dict_attributes_text_and_lists():
    tree = parse_xml(b'<r><i n="1">x</i><i>y</i></r>')
    assert tree.to_dict() == {"r": {"i": [{"-n": "1", "#text": "x"}, "y"]}}


def test_malformed_xml_raises():
    with pytest.raises(MalformedXML):
        parse_xml(b"<html><body>401 Unauthorized</body>")
    with pytest.raises(MalformedXML):
        parse_xml(b"")
