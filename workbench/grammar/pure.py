"""Pure lambda calculus grammar, written as S-expressions.

Formally, the workbench accepts

```
<λ-term> ::= <atom>                              ; "variable"
                                                 ; - any run of characters other than whitespace and parentheses
                                                 ; - must not be the lambda glyph itself
           | "(" "λ" <atom>+ <λ-term> ")"        ; "abstraction"
                                                 ; - parameters are flattened into the list: (λ x y body)
                                                 ; - (λ x y body) is shorthand for (λ x (λ y body))
           | "(" <λ-term> <λ-term>+ ")"          ; "application"
                                                 ; - associating by left: (f a b) = ((f a) b)
```

The explicit parameter-list variant `(λ (x y) body)` is not accepted: a list in parameter position is an error.
Backslash is shorthand for the lambda glyph while editing, and is replaced before the parser ever sees it.

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

CHARS = {
    "<open_paren>": "(",
    "<close_paren>": ")",
    "<lambda>": "λ",
    "<shorthand>": "\\",
}

OPEN = CHARS["<open_paren>"]
CLOSE = CHARS["<close_paren>"]
LAMBDA = CHARS["<lambda>"]
SHORTHAND = CHARS["<shorthand>"]
