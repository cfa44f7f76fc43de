"""Registry of special forms for the Kappa evaluator.

Maps reserved Symbols to handlers that implement non-standard evaluation rules.
The table is built once per Evaluator against its SymbolTable; the evaluator
consults it before ordinary function application.

A handler has two parts:
- begin(machine, operands): called by dispatch with the unevaluated operand list.
- resume(machine, frame): called when a sub-expression evaluated on behalf of a
  frame owned by this form returns. Forms that never push a frame have no resume.
"""

from __future__ import annotations

from typing import Callable, Optional

from kappa.types.symbol import Symbol, SymbolTable
from kappa.evaluation.special_forms.quote_form import quote_form
from kappa.evaluation.special_forms.define_form import define_form, define_resume
from kappa.evaluation.special_forms.lambda_form import lambda_form
from kappa.evaluation.special_forms.if_form import if_form, if_resume
from kappa.evaluation.special_forms.defmacro_form import defmacro_form
from kappa.evaluation.special_forms.apply_form import apply_form, apply_resume


class SpecialForm:
    __slots__ = ("name", "begin", "resume")

    def __init__(self, name: str, begin: Callable, resume: Optional[Callable] = None):
        self.name = name
        self.begin = begin
        self.resume = resume

    def __repr__(self) -> str:
        return f"<special form {self.name}>"


SPECIAL_FORMS = (
    SpecialForm("QUOTE", quote_form),
    SpecialForm("DEFINE", define_form, define_resume),
    SpecialForm("LAMBDA", lambda_form),
    SpecialForm("IF", if_form, if_resume),
    SpecialForm("DEFMACRO", defmacro_form),
    SpecialForm("APPLY", apply_form, apply_resume),
)


def build_special_forms(symbols: SymbolTable) -> dict[Symbol, SpecialForm]:
    return {symbols.intern(form.name): form for form in SPECIAL_FORMS}
