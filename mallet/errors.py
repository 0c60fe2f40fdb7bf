from typing import Any


class MalletError(Exception):
    """ Base class for all Mallet errors"""
    pass


# -------------------------------
# Reader errors
# -------------------------------
class MalletParseError(MalletError):
    """ Raised when source text cannot be read into a form"""


class MalletEmptyInput(MalletParseError):
    """ Raised when the source holds no form at all (blank line or comment only)"""

    def __init__(self, message: str = "empty input"):
        super().__init__(message)


class MalletUnexpectedEof(MalletParseError):
    """ Raised when the input ends in the middle of a form"""

    def __init__(self, message: str = "unexpected end of input"):
        super().__init__(message)


class MalletUnexpectedTerm(MalletParseError):
    """ Raised when tokens follow a complete top-level form"""


class MalletUnmatchedDelimiter(MalletParseError):
    """ Raised when a closing delimiter has no matching opener"""

    def __init__(self, char: str):
        super().__init__(f"unmatched delimiter {char!r}")
        self.char = char


class MalletLexError(MalletParseError):
    """ Raised when the lexer produced an error token"""


class MalletMapError(MalletParseError):
    """ Raised when a map literal has an odd element count or an invalid key"""


class MalletUnknownToken(MalletParseError):
    """ Raised when the parser meets a token it has no rule for"""


class MalletInternalError(MalletParseError):
    """ Raised when the reader reaches a state that should be impossible"""


# -------------------------------
# Evaluation errors
# -------------------------------
class MalletEvalError(MalletError):
    """ Base class for errors raised while evaluating a form"""


class MalletInvalidFunctionName(MalletEvalError):
    """ Raised when the head of a call does not evaluate to a function"""


class MalletArityError(MalletEvalError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class MalletInvalidFunction(MalletEvalError):
    """ Raised when a builtin expecting a function argument receives something else"""


class MalletTypeError(MalletEvalError):
    """ Raised when the types of arguments passed to a function are incorrect"""


class MalletInvalidVarargs(MalletEvalError):
    """ Raised when a parameter list misuses the & marker"""


class MalletUnboundSymbol(MalletEvalError):
    """ Raised when a symbol is used before it is bound"""


class MalletInvalidVariableName(MalletEvalError):
    """ Raised when def!/defmacro! is given a non-symbol name"""


class MalletInvalidLetVariables(MalletEvalError):
    """ Raised when a let* binding list is malformed"""


class MalletInvalidCatchBlock(MalletEvalError):
    """ Raised when a try* form carries a malformed catch* clause"""


class MalletReadError(MalletEvalError):
    """ Raised when read-string fails; the parse error is chained as the cause"""


class MalletIOError(MalletEvalError):
    """ Raised when slurp cannot read a file"""


class MalletStackOverflow(MalletEvalError):
    """ Raised when non-tail recursion exhausts the host stack; try* never catches it"""


class MalletException(MalletEvalError):
    """ Raised by (throw value); the only error try*/catch* can intercept"""

    def __init__(self, payload: Any):
        super().__init__(payload)
        self.payload: Any = payload

    def __str__(self) -> str:
        from mallet.printer import pr_str
        return f"uncaught exception: {pr_str(self.payload)}"
