"""
Pennant command layer: declare, run and dispatch a single CLI command.

What this module provides
- Command: wraps a handler callable into an executable CLI with:
  • Built-in -h/--help and -v/--version flags, injected first and in that order.
  • User flags declared at construction (flags=...) or through add_flag().
  • Pluggable help/version renderers (see pennant.renderers).
  • Faults routed through rich, raised or deferred depending on runtime options.

- Factories and helpers:
  • command(...): create a Command or a decorator that produces one.
  • invoke(obj, prompt): convenience runner for Commands or plain callables.

Execution (Command.execute)
    start ─▶ partitioned ─┬─▶ help shown      (handler not called)
                          ├─▶ version shown   (handler not called)
                          └─▶ dispatch ─▶ handler(input, flags) | missing input

- Raw arguments follow the argv convention: index 0 is the program path and is
  never matched; with no user token at all, "--help" is assumed.
- Help wins over version when both are present.
- The handler receives the first positional token and the user flags (the two
  built-in flags excluded), in declaration order.

Quick start
    from pennant import command, Flag, Boolean, invoke

    @command("gives a friendly hello", "hello TEXT", flags=[Flag.boolean("f", "ferris", "say hello from ferris")])
    def hello(text, flags):
        match flags[0].value:
            case Boolean(True):
                print(f"ferris says: hello, {text}!")
            case _:
                print(f"hello, {text}!")

    if __name__ == "__main__":
        invoke(hello)
"""
import copy
import inspect
import os.path
import shlex
import sys
from collections.abc import Iterable
from enum import Enum
from typing import NamedTuple

from rich.console import Console

from .faults import *
from .flags import Flag, LONG_PREFIX
from .parsing import partition
from .renderers import *
from .utils import *
from .values import Boolean

HELP_SHORT = "h"
HELP_LONG = "help"
VERSION_SHORT = "v"
VERSION_LONG = "version"

console = Console()


class Outcome(Enum):
    """Terminal branch taken by one Command.execute() run."""
    HELP_SHOWN = "help-shown"
    VERSION_SHOWN = "version-shown"
    HANDLER_INVOKED = "handler-invoked"
    NO_INPUT = "no-input"


class Execution(NamedTuple):
    """Result of Command.execute(): the outcome plus what the handler received."""
    outcome: Outcome
    input: str | None = None
    flags: tuple[Flag, ...] = ()


def _argv():
    return list(sys.argv)


def _echo(renderable):
    # plain strings are printed verbatim (no markup, no highlighting, no wrapping)
    console.print(renderable, markup=False, highlight=False, soft_wrap=True)


class Command:
    """
    A single CLI command bound to a handler.

    Responsibilities
    - Ownership: holds its flags (built-ins first) and its two renderers for its whole lifetime.
    - Parsing: delegates token splitting to pennant.parsing.partition.
    - Dispatch: short-circuits into help/version, otherwise calls the handler once.

    Collaborators (keyword-only, replaceable for tests or embedding)
    - arguments: Callable[[], Sequence[str]] returning argv-like tokens (default: sys.argv).
    - output: Callable[[str | rich renderable], None] receiving rendered text (default: rich stdout).

    Runtime options (keyword-only, default False)
    - shell: print faults and exit(1) instead of raising them.
    - fancy: panel chrome for faults and styled renderers.
    - colorful: palette styling for faults and styled renderers.
    - deferred: collect faults during parsing and surface them together.
    - noisy: report unknown flag tokens as warnings instead of dropping them silently.
    """

    def __init__(
            self,
            handler,
            /,
            descr=Unset,
            usage=Unset,
            *,
            name=Unset,
            version=Unset,
            flags=(),
            helper=Unset,
            versioner=Unset,
            arguments=Unset,
            output=Unset,
            shell=False,
            fancy=False,
            colorful=False,
            deferred=False,
            noisy=False,
    ):
        """
        Build a command around `handler(input, flags)`.

        Defaults
        - name: the handler's __name__ (or the program file name for lambdas).
        - descr: the handler's docstring, or an empty string.
        - usage: "{name} INPUT".
        - version: "1.0.0".

        Raises
        - TypeError on a non-callable handler, non-string metadata, non-boolean
          options or renderers without a callable render().
        - DuplicateFlagError when two flags share a short or long identifier.
        """
        if not callable(handler):
            raise TypeError("command handler must be callable")
        if not isinstance(name, str | Unset):
            raise TypeError("command 'name' must be a string")
        if not isinstance(version, str | Unset):
            raise TypeError("command 'version' must be a string")
        if not isinstance(descr, str | Unset):
            raise TypeError("command 'descr' must be a string")
        if not isinstance(usage, str | Unset):
            raise TypeError("command 'usage' must be a string")
        for option, object in (("arguments", arguments), ("output", output)):
            if object is not Unset and not callable(object):
                raise TypeError(f"command {option!r} must be callable")
        for option, object in (
                ("shell", shell), ("fancy", fancy), ("colorful", colorful), ("deferred", deferred), ("noisy", noisy)
        ):
            if not isinstance(object, bool):
                raise TypeError(f"command {option!r} must be a boolean")

        if (name := coalesce(name, getattr(handler, "__name__", "<lambda>"))) == "<lambda>":
            name = os.path.basename(sys.argv[0]) or "command"
        if not (name := name.strip()):
            raise ValueError("command 'name' cannot be empty")

        self._handler = handler
        self._name = name
        self._version = coalesce(version, "1.0.0")
        self._descr = coalesce(descr, inspect.getdoc(handler) or "")
        self._usage = coalesce(usage, f"{name} INPUT")
        self._arguments = coalesce(arguments, _argv)
        self._output = coalesce(output, _echo)
        self._shell = shell
        self._fancy = fancy
        self._colorful = colorful
        self._deferred = deferred
        self._noisy = noisy
        self._faults = []
        self._flags = []

        self.helper = coalesce(helper, DefaultHelpRenderer())
        self.versioner = coalesce(versioner, DefaultVersionRenderer())

        self._helpflag = self.add_flag(Flag.boolean(HELP_SHORT, HELP_LONG, f"help for {name}"))
        self._versionflag = self.add_flag(Flag.boolean(VERSION_SHORT, VERSION_LONG, f"version for {name}"))

        if not isinstance(flags, Iterable):
            raise TypeError("command 'flags' must be an iterable of flags")
        for flag in flags:
            self.add_flag(flag)

    @property
    def name(self):
        return self._name

    @property
    def version(self):
        return self._version

    @property
    def descr(self):
        return self._descr

    @property
    def usage(self):
        return self._usage

    @property
    def handler(self):
        return self._handler

    @property
    def flags(self):
        """All declared flags, built-ins first, in declaration order."""
        return tuple(self._flags)

    @property
    def user_flags(self):
        """Declared flags without the built-in help and version flags."""
        return tuple(flag for flag in self._flags if flag is not self._helpflag and flag is not self._versionflag)

    @property
    def helper(self):
        return self._helper

    @helper.setter
    def helper(self, helper):
        if not supports_render(helper):
            raise TypeError("command help renderer must have a callable render() method")
        self._helper = helper

    @property
    def versioner(self):
        return self._versioner

    @versioner.setter
    def versioner(self, versioner):
        if not supports_render(versioner):
            raise TypeError("command version renderer must have a callable render() method")
        self._versioner = versioner

    @property
    def shell(self):
        return self._shell

    @property
    def fancy(self):
        return self._fancy

    @property
    def colorful(self):
        return self._colorful

    @property
    def deferred(self):
        return self._deferred

    @property
    def noisy(self):
        return self._noisy

    def add_flag(self, flag, /):
        """
        Declare a new flag and return it.

        Raises
        - TypeError: flag is not a Flag.
        - DuplicateFlagError: its short or long identifier is already declared.
        """
        if not isinstance(flag, Flag):
            raise TypeError("add_flag() argument must be a flag")
        for declared in self._flags:
            if declared.short == flag.short:
                raise DuplicateFlagError(flag, flag.names[0])
            if declared.long == flag.long:
                raise DuplicateFlagError(flag, flag.names[1])
        self._flags.append(flag)
        return flag

    def flag(self, identifier, /):
        """
        Return the declared flag answering to `identifier`.

        The identifier may be given bare ("f", "ferris") or as a token ("-f", "--ferris").
        """
        if not isinstance(identifier, str):
            raise TypeError("flag() argument must be a string")
        for flag in self._flags:
            if identifier in (flag.short, flag.long) or flag.matches(identifier):
                return flag
        raise KeyError(identifier)

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this command's runtime options merged in.

        In deferred mode the fault is queued for _finalize(); otherwise it is
        triggered right away (raised, warned or printed, see pennant.faults).
        """
        if (
                not hasattr(fault, "__trigger__") or
                not callable(fault.__trigger__) or
                not hasattr(fault, "__replace__") or
                not callable(fault.__replace__)
        ):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        fault = copy.replace(
            fault, **options, tool=self, shell=self.shell, fancy=self.fancy, colorful=self.colorful, deferred=self.deferred
        )
        if self.deferred:
            return self._faults.append(fault)
        trigger(fault)

    def _report(self, fault):
        # unknown flags stay silent unless the command is noisy
        if isinstance(fault, UnknownFlagWarning) and not self.noisy:
            return
        self.trigger(fault)

    def _finalize(self):
        """
        surface collected faults: warnings first, then all errors grouped in a CommandExit.
        """
        exceptions = []
        warnings = []

        for fault in self._faults:
            if isinstance(fault, CommandException):
                exceptions.append(fault)
            elif isinstance(fault, CommandWarning):
                warnings.append(fault)
            else:
                raise RuntimeError("unexpected fault")
        self._faults.clear()

        for warning in warnings:
            trigger(warning)

        if not exceptions:
            return

        trigger(
            CommandExit(exceptions),
            tool=self,
            shell=self.shell,
            fancy=self.fancy,
            colorful=self.colorful,
            deferred=self.deferred
        )

    def _emit(self, renderable):
        # plain text goes out line by line, rich renderables in one piece
        if isinstance(renderable, str):
            for line in renderable.splitlines() or [""]:
                self._output(line)
        else:
            self._output(renderable)

    def _help_exit(self):
        match self._helpflag.value:
            case Boolean(True):
                self._emit(self.helper.render(self))
                return True
            case Boolean(False):
                return False

    def _version_exit(self):
        match self._versionflag.value:
            case Boolean(True):
                self._emit(self.versioner.render(self))
                return True
            case Boolean(False):
                return False

    def execute(self, arguments=Unset, /):
        """
        Run one full invocation and return its Execution.

        Parameters
        - arguments: Sequence[str] | Unset
          argv-like tokens (index 0 is the program path). When Unset, the
          `arguments` collaborator is asked for them.

        Flow
        - no user token → "--help" is assumed.
        - flags are reset to their declared payloads, then partition() runs on arguments[1:].
        - help, then version, short-circuit without calling the handler; flag value
          errors met while partitioning are dropped in that case.
        - otherwise those errors are triggered, then handler(positionals[0], user_flags)
          is called once.
        - with no positional input a MissingInputError is triggered. The built-in faults
          always raise or exit, so Outcome.NO_INPUT is only returned when an overridden
          trigger() lets the fault pass.
        """
        if arguments is Unset:
            arguments = self._arguments()
        if isinstance(arguments, str) or not isinstance(arguments, Iterable):
            raise TypeError("execute() argument must be an iterable of strings")
        arguments = list(arguments)
        if not all(isinstance(argument, str) for argument in arguments):
            raise TypeError("execute() argument must be an iterable of strings")

        tokens = arguments[1:] if len(arguments) > 1 else [LONG_PREFIX + HELP_LONG]

        self._faults.clear()
        for flag in self._flags:
            flag.reset()

        # errors wait until help and version had their say
        pending = []

        def report(fault):
            if isinstance(fault, CommandException):
                return pending.append(fault)
            self._report(fault)

        positionals = partition(self._flags, tokens, report=report)
        self._finalize()

        if self._help_exit():
            return Execution(Outcome.HELP_SHOWN)
        if self._version_exit():
            return Execution(Outcome.VERSION_SHOWN)

        for fault in pending:
            self.trigger(fault)
        self._finalize()  # If any error this statement is terminative

        if not positionals:
            self.trigger(MissingInputError(
                "no input was given",
                title="missing input",
                code=FaultCode.MISSING_INPUT,
                hint="pass the input, e.g. '%s'; run '%s --help' for details" % (self.usage, self.name),
                docs=getdoc(FaultCode.MISSING_INPUT),
            ))
            self._finalize()
            return Execution(Outcome.NO_INPUT)

        input, flags = positionals[0], self.user_flags
        self._handler(input, flags)
        return Execution(Outcome.HANDLER_INVOKED, input, flags)

    def __invoke__(self, prompt=Unset):
        """
        Execute this command with a token stream.

        Parameters
        - prompt:
          • Unset: use the `arguments` collaborator (sys.argv by default).
          • str: shell-like string, split via shlex.split.
          • Iterable[str]: pre-tokenized user tokens; each element is trimmed.

        The command name is prepended to str/iterable prompts to stand for the program path.
        """
        if prompt is Unset:
            return self.execute()
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            def _sanitized(iterable):
                for item in iterable:
                    if not isinstance(item, str):
                        raise TypeError(f"__invoke__() argument must be a string or an iterable of strings")
                    if item := item.strip():
                        yield item
            tokens = list(_sanitized(prompt))
        else:
            raise TypeError(f"__invoke__() argument must be a string or an iterable of strings")
        return self.execute([self.name, *tokens])

    def __repr__(self):
        return f"command(name={self.name!r}, version={self.version!r}, usage={self.usage!r}, flags={self.flags!r})"

    def __rich_repr__(self):
        yield "name", self.name
        yield "descr", self.descr
        yield "usage", self.usage
        yield "version", self.version
        yield "flags", self.flags
        yield "shell", self.shell
        yield "fancy", self.fancy
        yield "colorful", self.colorful
        yield "deferred", self.deferred
        yield "noisy", self.noisy


def command(source=Unset, /, *args, **kwargs):
    """
    Create a Command or return a decorator to build it later.

    Invocation modes
    - Direct: cmd = command(handler, "descr", "usage", name="x")
    - Decorator:
        @command("gives a friendly hello", "hello TEXT")
        def hello(text, flags): ...

    A string `source` is taken as the description, so the decorator form reads naturally.
    """
    if isinstance(source, str):
        args = (source, *args)
        source = Unset

    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        return Command(source, *args, **kwargs)

    return wrapper(source) if source is not Unset else wrapper


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for commands or callables.

    - If 'object' implements __invoke__, call it with prompt and return its result.
    - If 'object' is a plain callable, wrap it as a Command and then invoke.
    - Otherwise, raise TypeError.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    if callable(object):
        return invoke(command(object), prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "Outcome",
    "Execution",
    "Command",
    "command",
    "invoke",
)
