# Lispy: a small Lisp with S-expressions, Q-expressions and errors as values.
#
# Every runtime value is an instance of one of the closed set of classes in
# lispy.types (Long, Double, Bool, Ok, Symbol, String, Char, Builtin, Lambda,
# SExpr, QExpr, File, Error). Code and data share the same representation:
# the reader produces SExpr/QExpr trees that the evaluator reduces.

__version__ = "0.1.0"
