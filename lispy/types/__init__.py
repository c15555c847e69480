from lispy.types.value import (
    OK,
    Bool,
    Char,
    Double,
    Error,
    Expr,
    File,
    Long,
    Number,
    Ok,
    QExpr,
    SExpr,
    String,
    Value,
)
from lispy.types.symbol import Symbol
from lispy.types.environment import Environment
from lispy.types.lambda_fn import Builtin, BuiltinFn, Function, Lambda

__all__ = [
    "OK",
    "Bool",
    "Builtin",
    "BuiltinFn",
    "Char",
    "Double",
    "Environment",
    "Error",
    "Expr",
    "File",
    "Function",
    "Lambda",
    "Long",
    "Number",
    "Ok",
    "QExpr",
    "SExpr",
    "String",
    "Symbol",
    "Value",
]
