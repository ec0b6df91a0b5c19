from rich.console import Console
from rich.panel import Panel

from pennant import *

console = Console()


@command(
    "gives a friendly hello",
    "hello TEXT",
    name="hello",
    version=__version__,
    flags=[
        Flag.boolean("f", "ferris", "say hello from ferris"),
        Flag.integer("r", "repeat", "say hello this many times"),
    ],
    helper=StyledHelpRenderer(),
    colorful=True,
    shell=True,
)
def hello(text, flags):
    ferris, repeat = flags
    message = f"hello, {text}!"

    match repeat.value:
        case Integer(None):
            times = 1
        case Integer(times):
            pass

    for _ in range(max(times, 0)):
        match ferris.value:
            case Boolean(True):
                console.print(Panel(message, title="ferris says", title_align="left"))
            case Boolean(False):
                console.print(message, markup=False, highlight=False)


if __name__ == '__main__':
    invoke(hello)
