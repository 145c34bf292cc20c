# EasyLang language package
# Tokenizer, parser and tree-walking interpreter for the EasyLang
# beginner scripting language.
from .errors import EasyLangError, EasyLangRuntimeError
from .lexer import tokenize
from .parser import parse, parse_program
from .interpreter import Interpreter, RunResult, interpret, run_program

__all__ = [
    'tokenize',
    'parse',
    'parse_program',
    'interpret',
    'run_program',
    'Interpreter',
    'RunResult',
    'EasyLangError',
    'EasyLangRuntimeError',
]
