

class KappaError(Exception):
    """ Base class for all Kappa errors"""
    pass

class KappaSyntaxError(KappaError):
    """ Raised when an expression or source text is malformed"""

class KappaArityError(KappaError):
    """ Raised when the number of arguments passed to a function or special form is incorrect"""

class KappaTypeError(KappaError):
    """ Raised when the types of arguments passed to a function are incorrect"""

class KappaUnboundSymbol(KappaError):
    """ Raised when a symbol is used before it is bound"""

class KappaDivisionByZero(KappaError):
    """ Raised when an integer is divided by zero"""
