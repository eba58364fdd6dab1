from mehl.reader.parser import lex, parse, TokenStream
from mehl.reader.forms import Name, TupleForm, MapForm, CodeForm, format_body, format_form

__all__ = [
    "lex", "parse", "TokenStream",
    "Name", "TupleForm", "MapForm", "CodeForm", "format_body", "format_form",
]
