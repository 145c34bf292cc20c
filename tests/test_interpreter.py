import math
import sys

import pytest

from easylang.interpreter import Interpreter, run_program
from easylang.parser import parse_program
from easylang.types import coerce_input, format_number, to_string


def run(source, **kwargs):
    return run_program(source, **kwargs)


def output_of(source):
    result = run(source)
    assert result.error is None, result.error
    return result.output


def test_print_arithmetic():
    assert output_of('banao x = 10\nbanao y = 3\nlikho x + y') == ['13']


def test_if_else():
    source = 'banao age = 15\nagar age >= 18:\n    likho "adult"\nwarna:\n    likho "minor"'
    assert output_of(source) == ['minor']


def test_for_loop_over_range():
    assert output_of('dohrana i in range(3):\n    likho i') == ['0', '1', '2']


def test_function_call():
    source = 'system add(a, b):\n    return a + b\nlikho add(2, 3)'
    assert output_of(source) == ['5']


def test_constant_reassignment_keeps_earlier_output():
    result = run('sada PI = 3.14\nlikho PI\nPI = 3')
    assert result.output == ['3.14']
    assert result.error == "Cannot reassign constant 'PI'"
    assert not result.ok


def test_constant_unchanged_after_failed_reassignment():
    interp = Interpreter()
    failed = interp.interpret(parse_program('sada PI = 3.14\nPI = 3'))
    assert failed.error == "Cannot reassign constant 'PI'"
    assert interp.interpret(parse_program('likho PI')).output == ['3.14']


def test_statements_after_error_do_not_run():
    result = run('likho 1\nlikho missing\nlikho 2')
    assert result.output == ['1']
    assert result.error == "Undefined variable 'missing'"


def test_range_loop_runs_zero_times():
    assert output_of('dohrana i in range(0):\n    likho i\nlikho "end"') == ['end']


def test_range_floors_and_clamps():
    assert output_of('dohrana i in range(2.7):\n    likho i') == ['0', '1']
    assert output_of('dohrana i in range(-3):\n    likho i\nlikho "x"') == ['x']


def test_range_rejects_non_numbers():
    result = run('dohrana i in range("3"):\n    likho i')
    assert result.error == 'range() argument must be a number'


def test_for_requires_range():
    result = run('dohrana i in 5:\n    likho i')
    assert result.error == 'For loop requires a range'


def test_loop_variable_is_scoped_to_loop():
    result = run('dohrana i in range(2):\n    likho i\nlikho i')
    assert result.output == ['0', '1']
    assert result.error == "Undefined variable 'i'"


def test_loop_body_sees_outer_variables_but_not_the_reverse():
    source = (
        'banao outer = 7\n'
        'dohrana i in range(1):\n'
        '    banao y = outer + 1\n'
        '    likho y\n'
        'likho y'
    )
    result = run(source)
    assert result.output == ['8']
    assert result.error == "Undefined variable 'y'"


def test_redeclaring_inside_loop_body_fails_on_second_pass():
    result = run('dohrana i in range(2):\n    banao y = i\n    likho y')
    assert result.output == ['0']
    assert result.error == "Variable 'y' already defined"


def test_redeclaration_in_same_scope():
    result = run('banao x = 1\nbanao x = 2')
    assert result.error == "Variable 'x' already defined"


def test_shadowing_inside_function():
    source = (
        'banao x = 1\n'
        'system f():\n'
        '    banao x = 2\n'
        '    return x\n'
        'likho f()\n'
        'likho x'
    )
    assert output_of(source) == ['2', '1']


def test_assignment_reaches_enclosing_scope():
    source = (
        'banao count = 0\n'
        'system bump():\n'
        '    count = count + 1\n'
        'bump()\n'
        'bump()\n'
        'likho count'
    )
    assert output_of(source) == ['2']


def test_closure_captures_declaring_scope():
    source = (
        'system make_counter():\n'
        '    banao n = 0\n'
        '    system next():\n'
        '        n = n + 1\n'
        '        return n\n'
        '    return next\n'
        'banao c = make_counter()\n'
        'likho c()\n'
        'likho c()\n'
        'banao d = make_counter()\n'
        'likho d()'
    )
    assert output_of(source) == ['1', '2', '1']


def test_function_without_return_yields_false():
    assert output_of('system f():\n    banao a = 1\nlikho f()') == ['jhooth']


def test_bare_return_yields_false():
    assert output_of('system f():\n    return\nlikho f()') == ['jhooth']


def test_return_inside_loop_leaves_function():
    source = (
        'system first_over(limit):\n'
        '    dohrana i in range(10):\n'
        '        agar i > limit:\n'
        '            return i\n'
        '    return -1\n'
        'likho first_over(3)'
    )
    assert output_of(source) == ['4']


def test_top_level_return_ends_program_quietly():
    result = run('likho 1\nreturn 5\nlikho 2')
    assert result.output == ['1']
    assert result.error is None


def test_wrong_argument_count():
    result = run('system f(a):\n    return a\nf(1, 2)')
    assert result.error == "Function 'f' expects 1 arguments, got 2"


def test_calling_a_non_function():
    result = run('banao x = 1\nx()')
    assert result.error == "'x' is not a function"


def test_error_inside_function_propagates():
    result = run('system f():\n    return 1 / 0\nlikho "a"\nlikho f()\nlikho "b"')
    assert result.output == ['a']
    assert result.error == 'Division by zero'


def test_deep_recursion_is_reported():
    result = run('system f(n):\n    return f(n + 1)\nf(0)')
    assert result.error == 'Maximum call depth exceeded'


def test_recursion_a_thousand_calls_deep():
    source = (
        'system total(n):\n'
        '    agar n == 0:\n'
        '        return 0\n'
        '    return n + total(n - 1)\n'
        'likho total(1000)'
    )
    assert output_of(source) == ['500500']


def test_recursion_limit_restored_after_run():
    limit = sys.getrecursionlimit()
    run('system f(n):\n    return f(n + 1)\nf(0)')
    assert sys.getrecursionlimit() == limit


def test_recursive_function():
    source = (
        'system fact(n):\n'
        '    agar n <= 1:\n'
        '        return 1\n'
        '    return n * fact(n - 1)\n'
        'likho fact(10)'
    )
    assert output_of(source) == ['3628800']


def test_truthiness():
    source = (
        'agar 0:\n    likho "a"\n'
        'agar "":\n    likho "b"\n'
        'agar "x":\n    likho "c"\n'
        'agar -1:\n    likho "d"\n'
        'agar nahi jhooth:\n    likho "e"\n'
    )
    assert output_of(source) == ['c', 'd', 'e']


def test_string_concatenation_is_left_to_right():
    assert output_of('likho "a" + 1 + 2\nlikho 1 + 2 + "a"') == ['a12', '3a']
    assert output_of('likho "ok: " + sach') == ['ok: sach']


def test_equality_never_crosses_types():
    source = 'likho 1 == "1"\nlikho 1 != "1"\nlikho sach == 1\nlikho "a" == "a"'
    assert output_of(source) == ['jhooth', 'sach', 'jhooth', 'sach']


def test_logical_operators_return_booleans():
    assert output_of('likho 1 aur "x"\nlikho 0 ya ""') == ['sach', 'jhooth']


def test_logical_operators_evaluate_both_sides():
    result = run('likho sach ya missing')
    assert result.error == "Undefined variable 'missing'"


def test_invalid_operations():
    assert run('likho "a" - 1').error == 'Invalid binary operation: string - number'
    assert run('likho sach < 1').error == 'Invalid binary operation: boolean < number'
    assert run('likho -"a"').error == 'Invalid unary operation: - string'


def test_remainder_and_power():
    source = 'likho -7 % 3\nlikho 5 % 0\nlikho 2 ** 10\nlikho 2 ** 3 ** 2\nlikho 0 ** -1'
    assert output_of(source) == ['-1', 'NaN', '1024', '512', 'Infinity']


def test_division():
    assert output_of('likho 7 / 2\nlikho 10 / 3') == ['3.5', '3.3333333333333335']


def test_small_and_large_numbers_print_like_decimals():
    source = 'likho 1 / 100000\nlikho 1 / 10000000\nlikho 10 ** 21'
    assert output_of(source) == ['0.00001', '1e-7', '1e+21']


def test_printing_functions_and_ranges():
    assert output_of('system f():\n    return 1\nlikho f\nlikho range(3)') == [
        '[object]', '[object]',
    ]


def test_range_is_a_constant_builtin():
    result = run('range = 3')
    assert result.error == "Cannot reassign constant 'range'"


def test_while_loop_counts():
    assert output_of('banao n = 0\njab tak n < 3:\n    n = n + 1\nlikho n') == ['3']


def test_while_loop_return_leaves_function():
    source = (
        'system f():\n'
        '    banao n = 0\n'
        '    jab tak sach:\n'
        '        n = n + 1\n'
        '        agar n == 5:\n'
        '            return n\n'
        'likho f()'
    )
    assert output_of(source) == ['5']


def test_input_coercion():
    answers = iter(['42', 'hello'])
    result = run('banao a = puchho "a? "\nbanao b = puchho "b? "\nlikho a + 1\nlikho b + 1',
                 input_provider=lambda prompt: next(answers))
    assert result.output == ['43', 'hello1']


def test_failing_input_provider_is_a_runtime_error():
    def provider(prompt):
        raise ValueError('no stdin')

    result = run('likho 1\nbanao a = puchho "a? "\nlikho 2', input_provider=provider)
    assert result.output == ['1']
    assert result.error == 'Input failed: no stdin'


def test_input_provider_must_return_text():
    result = run('likho 1\nbanao a = puchho "a? "', input_provider=lambda prompt: 5)
    assert result.output == ['1']
    assert result.error == 'Input provider must return a string'


@pytest.mark.parametrize('text, expected', [
    ('42', 42.0),
    ('  -3.5 ', -3.5),
    ('1e3', 1000.0),
    ('.5', 0.5),
    ('12abc', '12abc'),
    ('', ''),
    ('inf', 'inf'),
    ('nan', 'nan'),
    ('1e999', '1e999'),
    ('\u0661\u0662', '\u0661\u0662'),
])
def test_coerce_input(text, expected):
    assert coerce_input(text) == expected


@pytest.mark.parametrize('value, expected', [
    (5.0, '5'),
    (-0.0, '0'),
    (3.14159, '3.14159'),
    (0.1 + 0.2, '0.30000000000000004'),
    (1e21, '1e+21'),
    (1.5e22, '1.5e+22'),
    (1.2345678901234568e20, '123456789012345680000'),
    (0.00001, '0.00001'),
    (0.000123, '0.000123'),
    (1e-7, '1e-7'),
    (-2.5e-9, '-2.5e-9'),
    (-2.5, '-2.5'),
    (math.nan, 'NaN'),
    (-math.inf, '-Infinity'),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_to_string_booleans():
    assert (to_string(True), to_string(False)) == ('sach', 'jhooth')


def test_interpreter_keeps_globals_between_runs():
    interp = Interpreter()
    assert interp.interpret(parse_program('banao x = 2')).ok
    result = interp.interpret(parse_program('likho x * 21'))
    assert result.output == ['42']


def test_output_is_reset_for_each_run():
    interp = Interpreter()
    interp.interpret(parse_program('likho 1'))
    assert interp.interpret(parse_program('likho 2')).output == ['2']


def test_environment_restored_after_error_in_function():
    interp = Interpreter()
    interp.interpret(parse_program('system f(a):\n    return missing'))
    assert interp.interpret(parse_program('f(1)')).error == "Undefined variable 'missing'"
    assert interp.environment is interp.global_env


def test_debug_trace_written_to_file(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=2, debug_file=str(debug_file))
    interp.interpret(parse_program('banao x = 1\nsada Y = 2'))
    interp.close()
    trace = debug_file.read_text(encoding='utf-8')
    assert 'declare variable x = 1' in trace
    assert 'declare constant Y = 2' in trace
