"""interactive_completion.py"""

import asyncio
from pathlib import Path

from prompt_toolkit import PromptSession

from slotwise import PositionalParser, SlotwiseError
from slotwise.completer import SlotCompleter
from slotwise.console import console


async def list_files(partial: list[str]) -> list[str]:
    await asyncio.sleep(0)
    return [path.name for path in Path.cwd().iterdir()]


parser = PositionalParser(command_key="deploy", help_text="Deploy services.")
parser.add_argument("env", choices=["dev", "staging", "prod"], required=True)
parser.add_argument("replicas", type=int, default=1, suggestions=["1", "2", "4"])
parser.add_argument("manifests", collection=True, completer=list_files)


async def main() -> None:
    session: PromptSession = PromptSession(
        completer=SlotCompleter(parser), complete_while_typing=True
    )
    parser.render_help()
    while True:
        try:
            text = await session.prompt_async("deploy> ")
        except (EOFError, KeyboardInterrupt):
            break
        try:
            console.print(parser.parse_args(text.split()))
        except SlotwiseError as error:
            console.print(f"[bold red]error:[/] {error}")


if __name__ == "__main__":
    asyncio.run(main())
