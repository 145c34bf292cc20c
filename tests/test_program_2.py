from pathlib import Path

from easylang.interpreter import Interpreter
from easylang.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_variables_and_constants():
    source = (EXAMPLES / 'program_2.easy').read_text(encoding='utf-8')
    result = Interpreter().interpret(parse_program(source))
    assert result.error is None
    assert result.output == ['Ali', '25', '3.14159', '100', '1.0']
