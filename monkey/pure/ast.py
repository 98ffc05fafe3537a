"""Abstract syntax tree for the Monkey language.

```
<program>    ::= <statement>*
<statement>  ::= "let" <ident> "=" <expression> ";"
               | "return" <expression> ";"
               | <expression> [";"]
<block>      ::= "{" <statement>* "}"
<expression> ::= <ident> | <int> | <string> | "true" | "false"
               | ("!" | "-") <expression>
               | <expression> <infix_op> <expression>
               | "(" <expression> ")"
               | "if" "(" <expression> ")" <block> ["else" <block>]
               | "fn" "(" [<ident> ("," <ident>)*] ")" <block>
               | <expression> "(" [<expression> ("," <expression>)*] ")"
```

Nodes are built in one go: the parser collects every child before calling a constructor, and constructors refuse
missing required children (IncompleteNode), so a half-built node can never be observed. Child sequences are stored
as tuples.

str(node) is the node's canonical source form. Infix and prefix expressions are fully parenthesized, so
`-a * b` renders as `((-a) * b)`, and the rendering always parses back to the same tree.
"""

from abc import ABC, abstractmethod

from monkey.lang.error import IncompleteNode


def render(statements):
    """Joins the source forms of statements, adding the ';' that keeps consecutive statements apart when re-lexed."""
    parts = [str(stmt) for stmt in statements]
    for idx, part in enumerate(parts[:-1]):
        if not part.endswith(";"):
            parts[idx] = part + ";"
    return " ".join(parts)


def _tuple(children):
    """tuple(children), passing a missing child list through so that Node can report it."""
    return None if children is None else tuple(children)


class Node(ABC):
    """Superclass of every AST node. Every node keeps the token it originated from."""
    required = ()  # names of children that must be present

    def __init__(self, token, **children):
        for field in self.required:
            if children.get(field) is None:
                raise IncompleteNode(type(self).__name__, field)

        self.token = token
        for field, child in children.items():
            setattr(self, field, child)

        self._cls = type(self).__name__
        self._frozen = True

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"{type(self).__name__} nodes are immutable")
        super().__setattr__(name, value)

    def token_literal(self):
        return self.token.literal

    @property
    def nodes(self):
        """Child nodes in source order. Used for display."""
        return []

    @abstractmethod
    def __str__(self):
        """Canonical source form of this node."""

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Node>(expr='<expr>', nodes=[
            <Node>(expr='<expr>', nodes=[
                ...
                <Node>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{self._cls}(expr={str(self)!r}"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{self._cls}({str(self)!r})"

    def __eq__(self, other):
        return isinstance(other, type(self)) and str(self) == str(other)

    def __hash__(self):
        return hash((self._cls, str(self)))


class Statement(Node):
    """Superclass for nodes that appear in statement position."""


class Expression(Node):
    """Superclass for nodes that produce a value."""


class Program(Node):
    """Root of the tree: the top-level statements, in order."""

    def __init__(self, statements=()):
        super().__init__(None, statements=tuple(statements))

    def token_literal(self):
        return self.statements[0].token_literal() if self.statements else ""

    @property
    def nodes(self):
        return list(self.statements)

    def __str__(self):
        return render(self.statements)


class Identifier(Expression):
    required = ("value",)

    def __init__(self, token, value):
        super().__init__(token, value=value)

    def __str__(self):
        return self.value


class LetStatement(Statement):
    """let <name> = <value>;"""
    required = ("name", "value")

    def __init__(self, token, name, value):
        super().__init__(token, name=name, value=value)

    @property
    def nodes(self):
        return [self.name, self.value]

    def __str__(self):
        return f"{self.token_literal()} {self.name} = {self.value};"


class ReturnStatement(Statement):
    required = ("return_value",)

    def __init__(self, token, return_value):
        super().__init__(token, return_value=return_value)

    @property
    def nodes(self):
        return [self.return_value]

    def __str__(self):
        return f"{self.token_literal()} {self.return_value};"


class ExpressionStatement(Statement):
    """A bare expression used as a statement. The trailing ';' is optional."""
    required = ("expression",)

    def __init__(self, token, expression):
        super().__init__(token, expression=expression)

    @property
    def nodes(self):
        return [self.expression]

    def __str__(self):
        return str(self.expression)


class BlockStatement(Statement):
    """Statements between '{' and '}'. token is the opening brace."""

    def __init__(self, token, statements=()):
        super().__init__(token, statements=tuple(statements))

    @property
    def nodes(self):
        return list(self.statements)

    def __str__(self):
        if not self.statements:
            return "{}"
        return f"{{ {render(self.statements)} }}"


class IntegerLiteral(Expression):
    required = ("value",)

    def __init__(self, token, value):
        super().__init__(token, value=value)

    def __str__(self):
        return self.token.literal


class StringLiteral(Expression):
    required = ("value",)

    def __init__(self, token, value):
        super().__init__(token, value=value)

    def __str__(self):
        return f"\"{self.value}\""


class Boolean(Expression):
    required = ("value",)

    def __init__(self, token, value):
        super().__init__(token, value=value)

    def __str__(self):
        return self.token.literal


class PrefixExpression(Expression):
    """<operator><right>, where operator is '!' or '-'."""
    required = ("operator", "right")

    def __init__(self, token, operator, right):
        super().__init__(token, operator=operator, right=right)

    @property
    def nodes(self):
        return [self.right]

    def __str__(self):
        return f"({self.operator}{self.right})"


class InfixExpression(Expression):
    """<left> <operator> <right>. token is the operator token."""
    required = ("left", "operator", "right")

    def __init__(self, token, left, operator, right):
        super().__init__(token, left=left, operator=operator, right=right)

    @property
    def nodes(self):
        return [self.left, self.right]

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


class IfExpression(Expression):
    """if (<condition>) <consequence> [else <alternative>]. alternative is None when there is no else branch."""
    required = ("condition", "consequence")

    def __init__(self, token, condition, consequence, alternative=None):
        super().__init__(token, condition=condition, consequence=consequence, alternative=alternative)

    @property
    def nodes(self):
        nodes = [self.condition, self.consequence]
        if self.alternative is not None:
            nodes.append(self.alternative)
        return nodes

    def __str__(self):
        condition = str(self.condition)
        if not isinstance(self.condition, (PrefixExpression, InfixExpression)):
            condition = f"({condition})"  # prefix and infix expressions are already parenthesized

        result = f"if {condition} {self.consequence}"
        if self.alternative is not None:
            result += f" else {self.alternative}"
        return result


class FunctionLiteral(Expression):
    """fn(<parameters>) <body>"""
    required = ("parameters", "body")

    def __init__(self, token, parameters, body):
        super().__init__(token, parameters=_tuple(parameters), body=body)

    @property
    def nodes(self):
        return list(self.parameters) + [self.body]

    def __str__(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


class CallExpression(Expression):
    """<function>(<arguments>). function is any expression that evaluates to a Function: an identifier or a
    function literal, usually.
    """
    required = ("function", "arguments")

    def __init__(self, token, function, arguments):
        super().__init__(token, function=function, arguments=_tuple(arguments))

    @property
    def nodes(self):
        return [self.function] + list(self.arguments)

    def __str__(self):
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.function}({args})"
