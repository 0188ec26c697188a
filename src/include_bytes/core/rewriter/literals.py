"""
String Literal Helpers.

Extraction of the marker path from its argument node, and rendering of file
contents back into a Python string literal.
"""

from typing import List, Optional

import libcst as cst

_ESCAPES = {
  "\\": "\\\\",
  "\n": "\\n",
  "\r": "\\r",
  "\t": "\\t",
}


def plain_string_value(node: cst.BaseExpression) -> Optional[str]:
  """
  Returns the text of a plain string literal.

  Only ``SimpleString`` nodes without a bytes prefix qualify. f-strings,
  implicit concatenations, bytes and every non-literal expression return None.

  Args:
      node: The argument expression.

  Returns:
      Optional[str]: The evaluated string, or None if ``node`` is not a plain string.
  """
  if not isinstance(node, cst.SimpleString):
    return None
  value = node.evaluated_value
  if not isinstance(value, str):
    return None
  return value


def quote_string(value: str, quote: str = '"') -> str:
  """
  Renders ``value`` as a single-line Python string literal.

  Backslashes, the quote character, line breaks and other non-printable
  characters are escaped; everything else is emitted verbatim.

  Args:
      value: The text to embed.
      quote: Either ``'"'`` or ``"'"``.

  Returns:
      str: Source code of the literal, including quotes.
  """
  parts = []
  for ch in value:
    if ch in _ESCAPES:
      parts.append(_ESCAPES[ch])
    elif ch == quote:
      parts.append("\\" + ch)
    elif not ch.isprintable():
      # repr gives \x.., \u.. or \U.. forms
      parts.append(repr(ch)[1:-1])
    else:
      parts.append(ch)
  return f"{quote}{''.join(parts)}{quote}"


def replace_string_value(node: cst.SimpleString, value: str) -> cst.SimpleString:
  """
  Builds a new literal holding ``value``, keeping the quote character of ``node``.

  String prefixes (``r``, ``u``) are dropped since the content is fully escaped.

  Args:
      node: The original literal.
      value: The replacement text.

  Returns:
      cst.SimpleString: The new literal node.
  """
  return node.with_changes(value=quote_string(value, node.quote[0]))


def fstring_conflict(literal: str, enclosing_quotes: List[str]) -> Optional[str]:
  """
  Finds a character that makes ``literal`` unparsable inside f-string fields.

  Before Python 3.12 the expression part of an f-string may not contain a
  backslash or ``#``, nor the quote character of any enclosing f-string.

  Args:
      literal: Rendered literal source, quotes included. Only the body is checked.
      enclosing_quotes: Quote characters of the f-strings around the call.

  Returns:
      Optional[str]: The first offending character, or None if ``literal`` fits.
  """
  forbidden = {"\\", "#", *enclosing_quotes}
  for ch in literal[1:-1]:
    if ch in forbidden:
      return ch
  return None
