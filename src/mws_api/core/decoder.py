"""XML response decoding.

Responses are converted into plain dicts: namespaces stripped, attributes
ignored, repeated sibling elements collected into lists, and leaf text
turned into a number only when the number prints back to the same text
(so ``0012`` or ``1.50`` stay strings).
"""

import re
from typing import Any, Dict, Optional, Tuple
from xml.etree import ElementTree

from mws_api.core.errors import ErrorKind, MwsError
from mws_api.core.logger import setup_logger

logger = setup_logger(__name__)

ERROR_ROOT = "ErrorResponse"

# Largest integer a double represents exactly
MAX_SAFE_INTEGER = 2 ** 53 - 1

INTEGER_TEXT = re.compile(r"-?\d+")
DECIMAL_TEXT = re.compile(r"-?\d+\.\d+")
CODE_TEXT = re.compile(r"<(?:\w+:)?Code>(.*?)</(?:\w+:)?Code>", re.S)
MESSAGE_TEXT = re.compile(r"<(?:\w+:)?Message>(.*?)</(?:\w+:)?Message>", re.S)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def coerce_scalar(text: str) -> Any:
    """Return int/float for plain numbers that round-trip, otherwise the text."""
    if INTEGER_TEXT.fullmatch(text):
        number = int(text)
        if abs(number) <= MAX_SAFE_INTEGER and str(number) == text:
            return number
        return text
    if DECIMAL_TEXT.fullmatch(text):
        number = float(text)
        if not number.is_integer() and str(number) == text:
            return number
    return text


def _element_value(element: ElementTree.Element) -> Any:
    children = list(element)
    if not children:
        return coerce_scalar((element.text or "").strip())

    value: Dict[str, Any] = {}
    for child in children:
        key = _local_name(child.tag)
        child_value = _element_value(child)
        if key not in value:
            value[key] = child_value
        elif isinstance(value[key], list):
            value[key].append(child_value)
        else:
            value[key] = [value[key], child_value]
    return value


def parse_xml(body: str) -> Dict[str, Any]:
    """
    Parse an XML document into a dict keyed by the root element name.

    Raises:
        ElementTree.ParseError: If the body is not well-formed XML
    """
    root = ElementTree.fromstring(body)
    return {_local_name(root.tag): _element_value(root)}


def extract_error_details(body: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Pull the first Code and Message out of an error body, if present."""
    if not body:
        return None, None
    code = CODE_TEXT.search(body)
    message = MESSAGE_TEXT.search(body)
    return (
        code.group(1).strip() if code else None,
        message.group(1).strip() if message else None,
    )


def decode(body: str, action: str) -> Any:
    """
    Decode a response body and return the ``{action}Result`` subtree.

    Args:
        body: Raw XML response
        action: Action name the request was made for

    Returns:
        The result subtree (dict, list or scalar)

    Raises:
        MwsError: UNDEFINED_REMOTE for an ErrorResponse document,
            MALFORMED_RESPONSE for unparseable bodies or a missing result path
    """
    try:
        tree = parse_xml(body)
    except ElementTree.ParseError as e:
        logger.error(f"Unparseable {action} response: {e}")
        raise MwsError(ErrorKind.MALFORMED_RESPONSE, f"Unparseable response: {e}", body=body) from e

    if ERROR_ROOT in tree:
        code, remote_message = extract_error_details(body)
        logger.error(f"{action} returned ErrorResponse: {code} {remote_message}")
        raise MwsError(
            ErrorKind.UNDEFINED_REMOTE,
            f"ErrorResponse: {code or 'unknown'}",
            body=body,
            code=code,
            remote_message=remote_message,
        )

    try:
        return tree[f"{action}Response"][f"{action}Result"]
    except (KeyError, TypeError):
        logger.error(f"{action} response has no {action}Result element")
        raise MwsError(
            ErrorKind.MALFORMED_RESPONSE,
            f"Missing {action}Response/{action}Result in response",
            body=body,
        ) from None

