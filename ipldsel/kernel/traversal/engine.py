"""Selector traversal engine.

Walks a graph of content-addressed blocks depth-first, applying a selector
program, and streams every block it fetches, whether or not later
instructions match inside it. A remote verifier replaying the same program
must see each block the responder examined, so fetched blocks are emitted
unconditionally and in visiting order.

Two cooperating pieces share one explicit stack of :class:`Frame` objects:

- ``_run_pass`` applies a program copy to one node until it is consumed, an
  instruction fails to match, or a recursive selector is reached;
- ``Traversal.run`` drives passes, repeats recursive ``follow`` programs
  within their depth budget and backtracks to pending siblings (LIFO).

No native recursion is involved, so graph depth and width only grow the
explicit stack.
"""

from __future__ import annotations

from collections import deque
from collections.abc import AsyncIterator, Mapping
from typing import Any, cast

from multiformats import CID

from ipldsel.kernel.domain.document import RootSelectorDocument, parse_document
from ipldsel.kernel.domain.node import Block, Node, cid_text, is_link
from ipldsel.kernel.domain.selectors import RecursiveSelector, program_to_raw
from ipldsel.kernel.exceptions import BlockNotFoundError, IpldSelError
from ipldsel.kernel.logging import get_logger
from ipldsel.kernel.ports.block_store import BlockStore
from ipldsel.kernel.ports.codec import CodecRegistry
from ipldsel.kernel.traversal.frames import Frame, Pass, PassStatus, RecursionContext
from ipldsel.kernel.traversal.selection import Selection, SelectionOutcome

logger = get_logger(__name__)


class SelectorEngine:
    """Evaluates root selector documents against a block store.

    The engine holds nothing but its injected capabilities; each call to
    :meth:`select` gets its own :class:`Traversal` with its own stack, so one
    engine can serve any number of independent selections.

    Parameters
    ----------
    block_store : BlockStore
        Where blocks are fetched from
    codecs : CodecRegistry
        Codecs used to decode fetched blocks, keyed by multicodec name
    """

    def __init__(self, block_store: BlockStore, codecs: CodecRegistry) -> None:
        self.block_store = block_store
        self.codecs = codecs

    def select(self, document: RootSelectorDocument | Mapping[str, Any]) -> Selection:
        """Start evaluating ``document``.

        Raw documents are validated immediately, so an
        :class:`~ipldsel.kernel.exceptions.InvalidSelectorError` is raised here,
        before anything is fetched.
        """
        if not isinstance(document, RootSelectorDocument):
            document = parse_document(document)
        return Selection(Traversal(self, document))

    async def fetch(self, cid: CID) -> Block:
        logger.debug("Loading block {cid}", cid=cid_text(cid))
        block = await self.block_store.aget(cid)
        if block is None:
            raise BlockNotFoundError(cid)
        return block

    def decode(self, block: Block) -> Node:
        return self.codecs.decode(block)


class Traversal:
    """State of one selector evaluation: stack, program cursor and outcome."""

    def __init__(self, engine: SelectorEngine, document: RootSelectorDocument) -> None:
        self.engine = engine
        self.document = document
        self.stack: list[Frame] = []
        self.leftover = document.program
        self.outcome = SelectionOutcome.PENDING
        self.blocks_emitted = 0

    async def run(self) -> AsyncIterator[Block]:
        """Yield every visited block, root first."""
        root = self.document.root
        logger.info(
            "Selecting from {root} with {count} instruction(s)",
            root=cid_text(root),
            count=len(self.document.program),
        )
        try:
            async for block in self._walk():
                self.blocks_emitted += 1
                yield block
        except IpldSelError:
            self.outcome = SelectionOutcome.FAILED
            logger.error("Selection from {root} aborted", root=cid_text(root))
            raise

        if self.leftover:
            self.outcome = SelectionOutcome.UNRESOLVED
            logger.info(
                "Selection from {root} unresolved after {count} block(s), remaining: {rest}",
                root=cid_text(root),
                count=self.blocks_emitted,
                rest=program_to_raw(self.leftover),
            )
        else:
            self.outcome = SelectionOutcome.RESOLVED
            logger.info(
                "Selection from {root} resolved after {count} block(s)",
                root=cid_text(root),
                count=self.blocks_emitted,
            )

    async def _walk(self) -> AsyncIterator[Block]:
        node: Node = self.document.root
        program = self.document.program
        recursion: RecursionContext | None = None

        while True:
            step = Pass(node=node, program=program)
            async for block in self._run_pass(step):
                yield block

            # Siblings resume with the recursion state (and depth budget)
            # of the pass that discovered them
            for frame in step.pending:
                frame.recursion = recursion
                self.stack.append(frame)

            if step.status is PassStatus.RECURSE:
                recursive = cast("RecursiveSelector", step.recursive)
                recursion = RecursionContext(
                    selector=recursive,
                    depth=recursive.depth_limit,
                    outer=step.program,
                )
                node = step.node
                if recursion.exhausted:
                    program, recursion = recursion.outer, None
                else:
                    program = recursion.selector.follow
                continue

            if recursion is not None:
                if step.status is PassStatus.MATCHED:
                    recursion = recursion.after_pass()
                    node = step.node
                    if not recursion.exhausted:
                        program = recursion.selector.follow
                        continue
                else:
                    node = step.start
                # Recursion halted on this branch: carry on with what follows it
                program, recursion = recursion.outer, None
                continue

            self.leftover = step.program
            if step.status is PassStatus.NO_MATCH:
                logger.debug(
                    "No match for {selector}, {pending} frame(s) pending",
                    selector=step.program[0].to_raw(),
                    pending=len(self.stack),
                )

            if not self.stack:
                return

            frame = self.stack.pop()
            node = frame.nodes.popleft()
            program, recursion = frame.program, frame.recursion
            if frame.nodes:
                self.stack.append(frame)

    async def _run_pass(self, step: Pass) -> AsyncIterator[Block]:
        if is_link(step.node):
            block = await self.engine.fetch(step.node)
            yield block
            step.node = self.engine.decode(block)
        step.start = step.node

        while step.program:
            selector = step.program[0]
            if isinstance(selector, RecursiveSelector):
                step.recursive = selector
                step.program = step.program[1:]
                step.status = PassStatus.RECURSE
                return

            match = selector.visit(step.node)
            if match is None:
                step.status = PassStatus.NO_MATCH
                return

            step.program = step.program[1:]
            if match.siblings:
                step.pending.append(Frame(nodes=deque(match.siblings), program=step.program))

            if is_link(match.node):
                # Emitted before anything inside it is known to match
                block = await self.engine.fetch(match.node)
                yield block
                step.node = self.engine.decode(block)
            else:
                step.node = match.node

        step.status = PassStatus.MATCHED
