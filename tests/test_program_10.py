from pathlib import Path

from easylang.interpreter import Interpreter
from easylang.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_10_fizzbuzz():
    source = (EXAMPLES / 'program_10.easy').read_text(encoding='utf-8')
    result = Interpreter().interpret(parse_program(source))
    assert result.error is None
    assert result.output == [
        '1', '2', 'Fizz', '4', 'Buzz', 'Fizz', '7', '8', 'Fizz', 'Buzz',
        '11', 'Fizz', '13', '14', 'FizzBuzz',
    ]
