"""Registry of special forms for the Mallet evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table before ordinary function application, so
these names cannot be shadowed by bindings. Every handler has the signature

    handler(tail, env, evaluate_fn) -> value | TailCall

where `tail` holds the unevaluated argument forms.
"""

from mallet.types.symbol import Symbol
from mallet.evaluation.special_forms.define_form import define_form
from mallet.evaluation.special_forms.defmacro_form import defmacro_form
from mallet.evaluation.special_forms.let_form import let_form
from mallet.evaluation.special_forms.do_form import do_form
from mallet.evaluation.special_forms.if_form import if_form
from mallet.evaluation.special_forms.lambda_form import lambda_form
from mallet.evaluation.special_forms.quote_forms import quote_form, quasiquote_form, quasiquote_expand_form
from mallet.evaluation.special_forms.macroexpand_forms import macroexpand_form
from mallet.evaluation.special_forms.try_catch_form import try_form

SPECIAL_FORMS = {
    Symbol("def!"): define_form,
    Symbol("defmacro!"): defmacro_form,
    Symbol("let*"): let_form,
    Symbol("do"): do_form,
    Symbol("if"): if_form,
    Symbol("fn*"): lambda_form,
    Symbol("quote"): quote_form,
    Symbol("quasiquote"): quasiquote_form,
    Symbol("quasiquoteexpand"): quasiquote_expand_form,
    Symbol("macroexpand"): macroexpand_form,
    Symbol("try*"): try_form,
}
