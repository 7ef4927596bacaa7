#!/usr/bin/env python3
"""
MATHCAT Feature Demonstration

This script demonstrates the major features of the MATHCAT library.
"""

from fractions import Fraction

from mathcat import (
    Evaluator, evaluate, exec_with,
    MathcatError, format_decimal, format_integer,
)


def section(title: str):
    """Print a section header."""
    print(f"\n{'='*60}")
    print(f" {title}")
    print('='*60)


def demo_basic_usage():
    """Demonstrate one-shot evaluation."""
    section("Basic Usage")

    examples = [
        "1 / 3 + 1 / 6",
        "0.1 + 0.2",
        "2 ** 3 ** 2",
        "10 - 3 - 2",
        "5 - -3",
        "-7 % 3",
    ]

    for expr_str in examples:
        print(f"  {expr_str} => {evaluate(expr_str)}")


def demo_literals():
    """Demonstrate number literals and output modes."""
    section("Literals and Output Modes")

    for expr_str in ["0xff", "0b110011", "0o666", "1.5e-3"]:
        print(f"  {expr_str} => {evaluate(expr_str)}")

    value = evaluate("0xff & 0b1010 | 0o100")
    print(f"\n  0xff & 0b1010 | 0o100 = {value}")
    for mode in ["decimal", "hex", "binary", "octal"]:
        print(f"  {mode:8}: {format_integer(value, mode)}")


def demo_functions():
    """Demonstrate built-in functions."""
    section("Functions")

    examples = [
        "max(1 / 3, 1 / 4)",
        "gcd(12, 18)",
        "fact(25)",
        "sqrt(2)",
        "logn(2, 1024)",
    ]

    for expr_str in examples:
        print(f"  {expr_str} => {format_decimal(evaluate(expr_str), 10)}")


def demo_variables():
    """Demonstrate persistent and overlaid variables."""
    section("Variables")

    calc = Evaluator()
    for expr_str in ["a = 150", "b = 715", "a += 1", "a ** 2 - (a / b)"]:
        result = calc.run(expr_str)
        print(f"  {expr_str} => {format_decimal(result, 6)}")

    print(f"\n  a is now {calc.get_variable('a')}")

    result = exec_with("price * (1 + rate)", {"price": 200, "rate": Fraction(1, 5)})
    print(f"  price * (1 + rate) with price=200, rate=1/5 => {result}")


def demo_errors():
    """Demonstrate error reporting."""
    section("Errors")

    for expr_str in ["1 / 0", "2.5 & 1", "max(1)", "5 = 3", "(1 + 2", "1 $ 2"]:
        try:
            evaluate(expr_str)
        except MathcatError as e:
            print(f"  {expr_str:10} => {type(e).__name__}: {e}")


def main():
    """Run all demonstrations."""
    print("MATHCAT - exact rational expression evaluation")
    print("Feature Demonstration")

    demo_basic_usage()
    demo_literals()
    demo_functions()
    demo_variables()
    demo_errors()

    print("\n" + "="*60)
    print(" Demo complete!")
    print("="*60)


if __name__ == "__main__":
    main()
