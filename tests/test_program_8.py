from pathlib import Path

from easylang.interpreter import Interpreter
from easylang.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_recursive_factorial():
    source = (EXAMPLES / 'program_8.easy').read_text(encoding='utf-8')
    result = Interpreter().interpret(parse_program(source))
    assert result.error is None
    assert result.output == ['120', '3628800']
