from lark import Lark, UnexpectedInput, Tree

from sql_calc_engine.calcast import Statement
from sql_calc_engine.calcerrors import CalcSqlParseError
from sql_calc_engine.calctransformer import CalcSqlTransformer


class CalcSqlParser:
    """
    Parser for the generic SQL dialect understood by the calculator.
    Uses Lark to create a parse tree which is transformed into the node classes of calcast.
    """

    _grammar = r"""
    start: [statement] (";" [statement])*

    ?statement: query
              | insert
              | update
              | delete

    // queries

    query: set_expr [order_by_clause] [limit_clause]

    ?set_expr: select
             | set_expr set_operator select                 -> set_operation

    set_operator: (UNION | INTERSECT | EXCEPT) [ALL | DISTINCT]

    select: _SELECT [select_modifier] projection [from_clause] [where_clause] [group_by_clause] [having_clause]

    select_modifier: DISTINCT | ALL

    projection: select_item ("," select_item)*

    ?select_item: wildcard
                | qualified_wildcard
                | expr_with_alias
                | unnamed_expr

    wildcard: "*"
    qualified_wildcard: object_name ".*"
    expr_with_alias: expr _AS ident
    unnamed_expr: expr

    from_clause: _FROM table_ref ("," table_ref)*
    table_ref: object_name
             | object_name _AS? ident

    where_clause: _WHERE expr
    group_by_clause: _GROUP _BY expr ("," expr)*
    having_clause: _HAVING expr
    order_by_clause: _ORDER _BY order_item ("," order_item)*
    order_item: expr [ASC | DESC]
    limit_clause: _LIMIT expr

    // other statements, parsed only to be rejected by the engine

    insert: _INSERT _INTO object_name [column_list] [insert_source]
    column_list: "(" ident ("," ident)* ")"
    ?insert_source: values
                  | query
    values: _VALUES row ("," row)*
    row: "(" expr ("," expr)* ")"

    update: _UPDATE object_name _SET assignment ("," assignment)* [where_clause]
    assignment: ident "=" expr

    delete: _DELETE _FROM object_name [where_clause]

    // expressions

    ?expr: or_expr

    ?or_expr: and_expr
            | or_expr _OR and_expr                          -> or_op

    ?and_expr: not_expr
             | and_expr _AND not_expr                       -> and_op

    ?not_expr: comparison
             | _NOT not_expr                                -> not_op

    ?comparison: sum
               | comparison "=" sum                         -> eq
               | comparison "!=" sum                        -> neq
               | comparison "<>" sum                        -> neq
               | comparison "<=" sum                        -> le
               | comparison "<" sum                         -> lt
               | comparison ">=" sum                        -> ge
               | comparison ">" sum                         -> gt

    ?sum: term
        | sum "+" term                                      -> add
        | sum "-" term                                      -> sub

    ?term: factor
         | term "*" factor                                  -> mul
         | term "/" factor                                  -> div
         | term "%" factor                                  -> mod
         | term "||" factor                                 -> concat

    ?factor: atom
           | "-" factor                                     -> neg
           | "+" factor                                     -> pos

    ?atom: literal
         | function
         | cast
         | case
         | "(" expr ")"                                     -> nested
         | "(" query ")"                                    -> subquery
         | object_name                                      -> identifier

    ?literal: NUMBER                                        -> number
            | SINGLE_QUOTED_STRING                          -> single_quoted_string
            | DOUBLE_QUOTED_STRING                          -> double_quoted_string
            | TRUE                                          -> boolean
            | FALSE                                         -> boolean
            | _NULL                                         -> null

    function: object_name "(" [function_args] ")"
    function_args: function_arg ("," function_arg)*
    ?function_arg: ident "=>" expr                          -> named_arg
                 | expr                                     -> unnamed_arg

    cast: _CAST "(" expr _AS data_type ")"
    data_type: NAME
             | NAME "(" NUMBER ("," NUMBER)* ")"

    case: _CASE [expr] when_clause+ [_ELSE expr] _END
    when_clause: _WHEN expr _THEN expr

    object_name: ident ("." ident)*
    ident: NAME
         | QUOTED_IDENT

    // keywords are reserved and case insensitive

    _SELECT.2: /select\b/i
    DISTINCT.2: /distinct\b/i
    ALL.2: /all\b/i
    _FROM.2: /from\b/i
    _WHERE.2: /where\b/i
    _GROUP.2: /group\b/i
    _BY.2: /by\b/i
    _HAVING.2: /having\b/i
    _ORDER.2: /order\b/i
    ASC.2: /asc\b/i
    DESC.2: /desc\b/i
    _LIMIT.2: /limit\b/i
    UNION.2: /union\b/i
    INTERSECT.2: /intersect\b/i
    EXCEPT.2: /except\b/i
    _AS.2: /as\b/i
    _AND.2: /and\b/i
    _OR.2: /or\b/i
    _NOT.2: /not\b/i
    _CAST.2: /cast\b/i
    _CASE.2: /case\b/i
    _WHEN.2: /when\b/i
    _THEN.2: /then\b/i
    _ELSE.2: /else\b/i
    _END.2: /end\b/i
    TRUE.2: /true\b/i
    FALSE.2: /false\b/i
    _NULL.2: /null\b/i
    _INSERT.2: /insert\b/i
    _INTO.2: /into\b/i
    _VALUES.2: /values\b/i
    _UPDATE.2: /update\b/i
    _SET.2: /set\b/i
    _DELETE.2: /delete\b/i

    NAME: /[A-Za-z_][A-Za-z0-9_]*/
    QUOTED_IDENT: /`[^`]*`/
    NUMBER: /(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?/
    SINGLE_QUOTED_STRING: /'([^']|'')*'/
    DOUBLE_QUOTED_STRING: /"([^"]|"")*"/

    COMMENT: /--[^\n]*/

    %import common.WS
    %ignore WS
    %ignore COMMENT
    """

    def __init__(self):
        self._parser = Lark(self._grammar, parser="lalr", start="start", maybe_placeholders=True)
        self._transformer = CalcSqlTransformer()

    def parse_tree(self, query: str) -> Tree:
        try:
            return self._parser.parse(query)
        except UnexpectedInput as e:
            raise CalcSqlParseError(query) from e

    def parse(self, query: str) -> list[Statement]:
        """
        Parses a text into the list of its statements.
        An empty text (or one with only comments and ";") gives an empty list.
        Raises CalcSqlParseError if the text is no valid SQL.
        """
        tree = self.parse_tree(query)
        return self._transformer.transform(tree)

    def is_valid(self, query: str) -> bool:
        try:
            self._parser.parse(query)
            return True
        except UnexpectedInput:
            return False
