"""
Pennant partitioner: split raw tokens into flag updates and positional input.

partition(flags, tokens, *, report) walks the tokens exactly once and returns a
fresh list with the positional tokens in their original order. The token
sequence given by the caller is never mutated.

Per token
- not a flag token        → appended to the positional output.
- matches a boolean flag  → the flag's payload becomes True (presence-only).
- matches a typed flag    → the following token is consumed as the argument and
                            coerced into the flag's variant (string/integer/float).
- matches nothing         → dropped; an UnknownFlagWarning is reported.

Faults are handed to `report`. The default reporter raises errors and drops
warnings, which keeps unknown flags silent unless the caller opts in.
"""
from .faults import *
from .flags import Flag, matches, is_flag_token
from .utils import *
from .values import Boolean, String, Integer, Float


def _silent(fault, /):
    if isinstance(fault, CommandException):
        raise fault


def partition(flags, tokens, /, *, report=Unset):
    """
    Update `flags` in place from `tokens` and return the positional tokens.

    Parameters
    - flags: Iterable[Flag]; every declared flag is tested against every flag token.
    - tokens: Iterable[str]; user tokens only (the program path is not expected here).
    - report: Callable[[fault], None] (keyword-only)
      receives UnknownFlagWarning, MissingFlagValueError and UncastableValueError.
      When it returns instead of raising, partitioning continues with the next token.

    Returns
    - list[str]: positional tokens, order preserved.
    """
    flags = tuple(flags)
    if not all(isinstance(flag, Flag) for flag in flags):
        raise TypeError("partition() first argument must be an iterable of flags")
    report = coalesce(report, _silent)
    if not callable(report):
        raise TypeError("partition() 'report' must be callable")

    positionals = []
    iterator = iter(tokens)
    index = 0

    for token in iterator:
        index += 1
        if not isinstance(token, str):
            raise TypeError("partition() second argument must be an iterable of strings")

        if not is_flag_token(token):
            positionals.append(token)
            continue

        matched = [flag for flag in flags if matches(flag, token)]
        if not matched:
            report(UnknownFlagWarning(
                "unknown flag %r at %s position was ignored" % (token, ordinal(index)),
                title="unknown flag",
                code=FaultCode.UNKNOWN_FLAG,
                input=token,
                index=index,
                hint="check the spelling — run with --help to see the declared flags",
                docs=getdoc(FaultCode.UNKNOWN_FLAG),
            ))
            continue

        # typed flags take the following token, whatever it looks like (e.g. "-3")
        argument = Unset
        if any(flag.value.parametric for flag in matched):
            argument = next(iterator, Unset)
            if argument is Unset:
                report(MissingFlagValueError(
                    "flag %r at %s position expects a value" % (token, ordinal(index)),
                    title="missing flag value",
                    code=FaultCode.MISSING_FLAG_VALUE,
                    input=token,
                    index=index,
                    hint="pass the value right after the flag, e.g. '%s VALUE'" % token,
                    docs=getdoc(FaultCode.MISSING_FLAG_VALUE),
                ))
            else:
                index += 1

        for flag in matched:
            match flag.value:
                case Boolean():
                    flag.value.payload = True
                case String() | Integer() | Float() if argument is Unset:
                    continue
                case String() | Integer() | Float():
                    try:
                        flag.value.payload = type(flag.value).parse(argument)
                    except ValueError as exception:
                        report(UncastableValueError(
                            "value %r of flag %r at %s position is not a valid %s" % (
                                argument, token, ordinal(index), flag.value.kind
                            ),
                            title="uncastable value",
                            code=FaultCode.UNCASTABLE_VALUE,
                            input=token,
                            index=index,
                            flag=flag,
                            hint="pass a %s value" % flag.value.kind,
                            docs=getdoc(FaultCode.UNCASTABLE_VALUE),
                            exception=exception,
                        ))

    return positionals


__all__ = (
    "partition",
)
