"""Registry of special forms for the lwhlisp evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table, by the leading symbol of a form, before
ordinary function application.
"""

from lwhlisp.types.symbol import Symbol
from lwhlisp.evaluation.special_forms.quote_form import quote_form
from lwhlisp.evaluation.special_forms.if_form import if_form
from lwhlisp.evaluation.special_forms.lambda_form import lambda_form
from lwhlisp.evaluation.special_forms.define_form import define_form
from lwhlisp.evaluation.special_forms.defmacro_form import defmacro_form

SPECIAL_FORMS = {
    Symbol("quote"): quote_form,
    Symbol("if"): if_form,
    Symbol("lambda"): lambda_form,
    Symbol("define"): define_form,
    Symbol("defmacro"): defmacro_form,
}
