# symbolop

`symbolop` reads expressions in one variable, `x`, and builds binary expression trees from them. It then works on those trees in place. With it you can:

- differentiate a tree symbolically (`symbolop.differentiate.differentiate`);
- put a number in place of `x` (`symbolop.differentiate.substitute_x`);
- integrate sums and differences of `c*x^n`-style terms (`symbolop.integrate.integrate`);
- fold numbers and drop neutral terms (`symbolop.simplify`);
- render a tree as infix text, or draw it sideways (`symbolop.display`).

It has no dependencies beyond the standard library and needs Python 3.10 or later.

## Expressions

An expression can contain:

- numbers;
- the variable `x`;
- the binary operators `+ - * / ^`;
- parentheses.

The rules for signs and operators are these:

- A leading `-` or `+` is unary. So is a `-` or `+` that follows `/`, `*`, `^` or `(`.
- A run of signs collapses to a single sign. `--` becomes `+` and `-+-` becomes `+`.
- A `*` or `/` must have a number, `x` or `)` on its left.
- An exponent must be made only of numbers. A negative exponent is written `x^(-2)`; `x^-2` is rejected.
- Division by a numeric zero is rejected.

Each stage is a function in `symbolop.lexer`:

| Function | What it does |
| --- | --- |
| `normalize_expression` | checks the text and returns it in normalised form; a unary minus becomes `~` |
| `tokenize` | splits the text into `Token` objects |
| `check_tokens` | rejects `^` followed directly by a unary minus |
| `to_postfix` | reorders the tokens; `^` and unary minus group from the right |
| `postfix_to_tree` | builds a `Node` tree; `~a` becomes `0 - a` |
| `check_tree` | rejects a zero divisor and a non-numeric exponent |

Every failure raises `symbolop.model.ExpressionError`, which is a `ValueError`. Most messages end with the offending text and a `^` marker under the faulty position.

## Commands

`symbolop.command` reads command strings of these forms:

| Command | `CommandType` |
| --- | --- |
| `diff(expression)` | `DIFF_CHAR` |
| `diff(expression, x0)` | `DIFF_NUM` |
| `inte(expression)` | `INTE_CHAR` |
| `inte(expression, left, right)` | `INTE_NUM` |

`classify_command` works out which form a command has. `parse_math_argument` then returns a `ParsedCommand` with these fields:

- `kind`;
- `tree`, the expression tree;
- `x`, the second argument, if there is one;
- `right`, the third argument, if there is one.

`parse_math_argument` does not call `check_tree`, so call it yourself before you differentiate or integrate the tree.

```python
from symbolop.command import classify_command, parse_math_argument
from symbolop.differentiate import differentiate, substitute_x
from symbolop.lexer import check_tree
from symbolop.simplify import fold_numbers

command = "diff(x^3 + 2*x, 2)"
parsed = parse_math_argument(command, classify_command(command))
check_tree(parsed.tree)

differentiate(parsed.tree)
substitute_x(parsed.tree, parsed.x)
fold_numbers(parsed.tree, True)
print(parsed.tree.num)  # 14.0
```

## Differentiation and simplification

```python
from symbolop.differentiate import differentiate
from symbolop.display import tree_to_infix
from symbolop.lexer import check_tokens, check_tree, normalize_expression, postfix_to_tree, to_postfix, tokenize
from symbolop.simplify import fold_numbers, simplify_add_zero, simplify_pow_one, simplify_times_one

tokens = tokenize(normalize_expression("x^3 + 2*x"))
check_tokens(tokens)
root = postfix_to_tree(to_postfix(tokens))
check_tree(root)

differentiate(root)
fold_numbers(root, False)
simplify_times_one(root)
simplify_pow_one(root)
simplify_add_zero(root)
print(tree_to_infix(root, -1))
```

`fold_numbers` evaluates every operator whose two operands are numbers. It folds division only when its second argument is true. The other rewrites are:

| Function | Rewrite |
| --- | --- |
| `simplify_times_one` | `1*a` and `a*1` become `a` |
| `simplify_div_one` | `a/1` becomes `a` |
| `simplify_pow_one` | `a^1` becomes `a` |
| `simplify_pow_zero` | `a^0` becomes `1` |
| `simplify_add_zero` | `0+a` and `a+0` become `a` |
| `simplify_sub_zero` | `a-0` becomes `a` |

`tree_to_infix` leaves out the multiplication sign, so `3*x^2` is printed as `3x^2`. It adds brackets only where precedence needs them.

## Integration

`symbolop.integrate.check_integrable` raises `ExpressionError` for any of these:

- a product of two factors that both contain `x`;
- any division;
- a power that is not `x` raised to a numeric exponent.

`integrate` then rewrites the tree as follows:

- a constant `c` becomes `c*x`;
- `x` becomes `x^2/2`;
- `x^c` becomes `x^(c+1)/(c+1)`;
- sums, differences and constant multiples are integrated term by term.

## Display helpers

`symbolop.display` provides these functions:

- `format_tree` draws a tree sideways, with the right subtree above and the left subtree below;
- `format_tokens` renders tokens back to text;
- `format_marker` and `format_token_marker` build the marked error blocks;
- `table` builds a horizontal rule;
- `main_menu` returns a menu text.

## What it does not do

`symbolop` is a library only. It has no interactive prompt and no command-line program, and it installs no command.

The `inte(expression, left, right)` form is only parsed. No function computes a definite integral. To get one, do these steps yourself:

1. Integrate the tree.
2. Copy it with `Node.copy`.
3. Call `substitute_x` on each copy, once with `left` and once with `right`.
4. Fold each copy with `fold_numbers(tree, True)`.
5. Subtract the two values.