"""Tree-walking evaluator for the Monkey language: evaluate(node, env) returns the Object a node evaluates to.

Control flow is carried by values. `return` produces a ReturnValue and runtime errors produce an Error; every step
that evaluates a sub-node checks for these and hands them back unchanged, so they travel up through nested blocks
until a function call unwraps the ReturnValue or the program finishes. There is no construct that catches an Error.

The evaluator never raises for a bad Monkey program. It raises UnknownNode when handed something that isn't an AST
node, which is a bug in the caller.

Every Monkey call costs about a dozen Python frames, so the interpreter raises Python's recursion limit to
RECURSION_LIMIT on import. Recursion that still runs out of stack evaluates to the Error
"maximum recursion depth exceeded".
"""

import sys

from monkey.lang.error import UnknownNode
from monkey.pure import ast
from monkey.pure.environment import Environment
from monkey.pure.object import (FALSE, NULL, TRUE, Error, Function, Integer, ReturnValue, String, native_bool,
                                INTEGER_OBJ, STRING_OBJ)


RECURSION_LIMIT = 8000  # Python frames, enough for roughly 700 nested Monkey calls

if sys.getrecursionlimit() < RECURSION_LIMIT:
    sys.setrecursionlimit(RECURSION_LIMIT)


def evaluate(node, env):
    """Evaluates node in env. env is only ever written to by let statements and function calls."""
    if isinstance(node, ast.Program):
        return eval_program(node, env)

    # statements
    elif isinstance(node, ast.BlockStatement):
        return eval_block_statement(node, env)
    elif isinstance(node, ast.ExpressionStatement):
        return evaluate(node.expression, env)
    elif isinstance(node, ast.ReturnStatement):
        value = evaluate(node.return_value, env)
        if is_error(value):
            return value
        return ReturnValue(value)
    elif isinstance(node, ast.LetStatement):
        value = evaluate(node.value, env)
        if is_error(value):
            return value
        return env.set(node.name.value, value)

    # literals
    elif isinstance(node, ast.IntegerLiteral):
        return Integer(node.value)
    elif isinstance(node, ast.StringLiteral):
        return String(node.value)
    elif isinstance(node, ast.Boolean):
        return native_bool(node.value)

    # expressions
    elif isinstance(node, ast.PrefixExpression):
        right = evaluate(node.right, env)
        if is_error(right):
            return right
        return eval_prefix_expression(node.operator, right)
    elif isinstance(node, ast.InfixExpression):
        left = evaluate(node.left, env)
        if is_error(left):
            return left
        right = evaluate(node.right, env)
        if is_error(right):
            return right
        return eval_infix_expression(node.operator, left, right)
    elif isinstance(node, ast.IfExpression):
        return eval_if_expression(node, env)
    elif isinstance(node, ast.Identifier):
        return eval_identifier(node, env)
    elif isinstance(node, ast.FunctionLiteral):
        return Function(node.parameters, node.body, env)
    elif isinstance(node, ast.CallExpression):
        function = evaluate(node.function, env)
        if is_error(function):
            return function
        args = eval_expressions(node.arguments, env)
        if len(args) == 1 and is_error(args[0]):
            return args[0]
        return apply_function(function, args)

    raise UnknownNode(node)


def eval_program(program, env):
    """Evaluates top-level statements in order. A ReturnValue stops the program and is unwrapped; an Error stops it
    and is the result. An empty program evaluates to NULL.
    """
    result = NULL
    for stmt in program.statements:
        result = evaluate(stmt, env)
        if isinstance(result, ReturnValue):
            return result.value
        elif isinstance(result, Error):
            return result
    return result


def eval_block_statement(block, env):
    """Like eval_program, but a ReturnValue is passed up still wrapped, so that enclosing blocks stop as well."""
    result = NULL
    for stmt in block.statements:
        result = evaluate(stmt, env)
        if isinstance(result, (ReturnValue, Error)):
            return result
    return result


def eval_prefix_expression(operator, right):
    if operator == "!":
        return eval_bang_operator_expression(right)
    elif operator == "-":
        return eval_minus_prefix_operator_expression(right)
    return Error(f"unknown operator: {operator}{right.type}")


def eval_bang_operator_expression(right):
    return FALSE if is_truthy(right) else TRUE


def eval_minus_prefix_operator_expression(right):
    if right.type != INTEGER_OBJ:
        return Error(f"unknown operator: -{right.type}")
    return Integer(-right.value)


def eval_infix_expression(operator, left, right):
    if left.type == INTEGER_OBJ and right.type == INTEGER_OBJ:
        return eval_integer_infix_expression(operator, left, right)
    elif left.type == STRING_OBJ and right.type == STRING_OBJ:
        return eval_string_infix_expression(operator, left, right)
    elif operator == "==":
        return native_bool(left is right)
    elif operator == "!=":
        return native_bool(left is not right)
    elif left.type != right.type:
        return Error(f"type mismatch: {left.type} {operator} {right.type}")
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def eval_integer_infix_expression(operator, left, right):
    left_val = left.value
    right_val = right.value

    if operator == "+":
        return Integer(left_val + right_val)
    elif operator == "-":
        return Integer(left_val - right_val)
    elif operator == "*":
        return Integer(left_val * right_val)
    elif operator == "/":
        if right_val == 0:
            return Error("division by zero")
        quotient = abs(left_val) // abs(right_val)  # truncate toward zero
        return Integer(quotient if (left_val < 0) == (right_val < 0) else -quotient)
    elif operator == "<":
        return native_bool(left_val < right_val)
    elif operator == ">":
        return native_bool(left_val > right_val)
    elif operator == "==":
        return native_bool(left_val == right_val)
    elif operator == "!=":
        return native_bool(left_val != right_val)
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def eval_string_infix_expression(operator, left, right):
    if operator != "+":
        return Error(f"unknown operator: {left.type} {operator} {right.type}")
    return String(left.value + right.value)


def eval_if_expression(node, env):
    condition = evaluate(node.condition, env)
    if is_error(condition):
        return condition

    if is_truthy(condition):
        return evaluate(node.consequence, env)
    elif node.alternative is not None:
        return evaluate(node.alternative, env)
    return NULL


def eval_identifier(node, env):
    value = env.get(node.value)
    if value is None:
        return Error(f"identifier not found: {node.value}")
    return value


def eval_expressions(expressions, env):
    """Evaluates expressions left to right. On the first Error, returns a list holding only that Error."""
    result = []
    for expression in expressions:
        evaluated = evaluate(expression, env)
        if is_error(evaluated):
            return [evaluated]
        result.append(evaluated)
    return result


def apply_function(function, args):
    """Calls function with args. The result is never a ReturnValue: a `return` inside the body ends here."""
    if not isinstance(function, Function):
        return Error(f"not a function: {function.type}")

    if len(args) != len(function.parameters):
        return Error(f"wrong number of arguments: want={len(function.parameters)}, got={len(args)}")

    extended_env = extend_function_env(function, args)
    try:
        evaluated = evaluate(function.body, extended_env)
    except RecursionError:
        return Error("maximum recursion depth exceeded")
    return unwrap_return_value(evaluated)


def extend_function_env(function, args):
    """New environment for a call: parameters bound to args, enclosing the function's defining environment."""
    env = Environment.new_enclosed(function.env)
    for param, arg in zip(function.parameters, args):
        env.set(param.value, arg)
    return env


def unwrap_return_value(obj):
    if isinstance(obj, ReturnValue):
        return obj.value
    return obj


def is_truthy(obj):
    """NULL and FALSE are falsy, everything else (0 and "" included) is truthy."""
    return obj is not NULL and obj is not FALSE


def is_error(obj):
    return isinstance(obj, Error)
