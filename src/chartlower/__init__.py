"""chartlower — scale and layout lowering passes for a declarative chart grammar."""

__version__ = "0.3.0"
