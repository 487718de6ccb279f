"""Monte Carlo Tree Search AI implementation for Taifho.

UCB1 selection, one-child expansion and an evaluation "rollout": instead of
playing random games to the end, the reached position is scored once with
the static evaluator and squashed onto [0, 1].

Node values
-----------
Each node accumulates value from the perspective of the color that moved
*into* it, so a parent simply prefers children with the higher win rate.
The leaf value ``r`` is expressed from the root player's side:

- two players: the value flips at every level on the way up;
- four players: nodes entered by the root color receive ``r`` and nodes
  entered by any other color receive ``1 - r`` (everyone plays against
  the root player).

Nodes live in a flat arena (:class:`MCTSTree`) and refer to their parent
and children by index.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Optional

from ..board import Board
from ..models import AIConfig, Move, PlayerColor
from .base import BaseAI
from .evaluator import evaluate_board, evaluate_for_mover, normalize_score
from .move_generator import detect_player_count, get_all_legal_moves, simulate_move
from .session import AISession

logger = logging.getLogger(__name__)

# UCB1 exploration constant
EXPLORATION_C = 1.41
# Multiplier for a root child that undoes or repeats a recent MCTS move.
REPETITION_PENALTY_VISITS = 0.3
# Multiplier for a root child that reaches a position seen twice already.
NEAR_REPETITION_FACTOR = 0.1
POSITION_PENALTY_SCALE = 1000
DEFAULT_SIMULATIONS = 2000
DEFAULT_MCTS_MOVE_SIMULATIONS = 1000

NO_PARENT = -1


@dataclass
class MCTSNode:
    board: Board
    player: PlayerColor
    move: Optional[Move]
    parent: int
    untried_moves: list[Move]
    children: list[int] = field(default_factory=list)
    visits: int = 0
    wins: float = 0.0

    @property
    def win_rate(self) -> float:
        return self.wins / self.visits if self.visits > 0 else 0.0


class MCTSTree:
    """Arena of nodes; index 0 is the root."""

    def __init__(self, board: Board, player: PlayerColor, ai: "MCTSAI") -> None:
        self._ai = ai
        self.nodes: list[MCTSNode] = []
        self.add_node(board, player, None, NO_PARENT)

    @property
    def root(self) -> MCTSNode:
        return self.nodes[0]

    def add_node(
        self,
        board: Board,
        player: PlayerColor,
        move: Optional[Move],
        parent: int,
    ) -> int:
        index = len(self.nodes)
        self.nodes.append(
            MCTSNode(
                board=board,
                player=player,
                move=move,
                parent=parent,
                untried_moves=get_all_legal_moves(board, player),
            )
        )
        if parent != NO_PARENT:
            self.nodes[parent].children.append(index)
        return index

    def ucb1(self, index: int, parent_visits: int) -> float:
        node = self.nodes[index]
        if node.visits == 0:
            return math.inf
        exploitation = node.wins / node.visits
        exploration = EXPLORATION_C * math.sqrt(math.log(parent_visits) / node.visits)
        return exploitation + exploration

    def select_child(self, index: int) -> int:
        node = self.nodes[index]
        best = node.children[0]
        best_value = -math.inf
        for child in node.children:
            value = self.ucb1(child, node.visits)
            if value > best_value:
                best_value = value
                best = child
        return best

    def expand(self, index: int) -> int:
        node = self.nodes[index]
        move = node.untried_moves.pop()
        board = simulate_move(node.board, move)
        return self.add_node(
            board, self._ai.next_player(board, node.player), move, index
        )

    def backpropagate(
        self, index: int, value: float, root_player: PlayerColor, four_player: bool
    ) -> None:
        """Credit ``value`` (root player's side) to ``index`` and its ancestors."""
        nodes = self.nodes
        if four_player:
            while index != NO_PARENT:
                node = nodes[index]
                node.visits += 1
                mover = nodes[node.parent].player if node.parent != NO_PARENT else root_player
                node.wins += value if mover == root_player else 1 - value
                index = node.parent
            return

        node = nodes[index]
        mover = nodes[node.parent].player if node.parent != NO_PARENT else root_player
        result = value if mover == root_player else 1 - value
        while index != NO_PARENT:
            node = nodes[index]
            node.visits += 1
            node.wins += result
            result = 1 - result
            index = node.parent


class MCTSAI(BaseAI):
    """AI that uses Monte Carlo Tree Search with evaluation rollouts."""

    def __init__(
        self,
        color: PlayerColor,
        config: AIConfig,
        session: Optional[AISession] = None,
        default_simulations: int = DEFAULT_SIMULATIONS,
    ):
        super().__init__(color, config, session)
        self.default_simulations = default_simulations
        self.iterations = 0

    def select_move(self, board: Board) -> Optional[Move]:
        if self.config.time_limit:
            return self.search_timed(board, self.config.time_limit)
        return self.search(
            board, self.config.mcts_simulations or self.default_simulations
        )

    def search(self, board: Board, simulations: int) -> Optional[Move]:
        """Run exactly ``simulations`` iterations."""
        tree, early = self._prepare(board)
        if tree is None:
            return early
        four_player = detect_player_count(board) == 4
        for _ in range(simulations):
            self._iterate(tree, four_player)
        self.iterations = simulations
        return self._choose(tree)

    def search_timed(self, board: Board, time_limit_ms: int) -> Optional[Move]:
        """Iterate until ``time_limit_ms`` has elapsed."""
        tree, early = self._prepare(board)
        if tree is None:
            return early
        four_player = detect_player_count(board) == 4
        deadline = time.time() + time_limit_ms / 1000.0
        iterations = 0
        while iterations == 0 or time.time() < deadline:
            self._iterate(tree, four_player)
            iterations += 1
        self.iterations = iterations
        logger.debug(f"MCTS: {iterations} iterations in {time_limit_ms}ms")
        return self._choose(tree)

    def _prepare(self, board: Board) -> tuple[Optional[MCTSTree], Optional[Move]]:
        tree = MCTSTree(board, self.color, self)
        root_moves = tree.root.untried_moves
        if not root_moves:
            return None, None
        if len(root_moves) == 1:
            only = root_moves[0]
            self.search_state.mcts_recent_moves.append(only)
            return None, only
        return tree, None

    def _iterate(self, tree: MCTSTree, four_player: bool) -> None:
        index = 0
        node = tree.nodes[index]
        while not node.untried_moves and node.children:
            index = tree.select_child(index)
            node = tree.nodes[index]
        if node.untried_moves:
            index = tree.expand(index)
            node = tree.nodes[index]
        value = self._rollout(node.board, node.player, four_player)
        tree.backpropagate(index, value, self.color, four_player)

    def _rollout(self, board: Board, to_move: PlayerColor, four_player: bool) -> float:
        """Static evaluation squashed onto [0, 1], root player's side."""
        move_count = self.session.move_count
        finished = self.session.finished_set
        if four_player and to_move != self.color:
            blended = evaluate_for_mover(board, to_move, self.color, move_count, finished)
            return 1.0 - normalize_score(blended)
        return normalize_score(evaluate_board(board, self.color, move_count, finished))

    def _choose(self, tree: MCTSTree) -> Optional[Move]:
        history = self.session.position_history
        state = self.search_state
        best_move: Optional[Move] = None
        best_score = -math.inf

        for index in tree.root.children:
            child = tree.nodes[index]
            if child.move is None:
                continue
            score = child.visits * child.win_rate
            if state.is_mcts_oscillation(child.move):
                score *= REPETITION_PENALTY_VISITS
            penalty = history.combined_penalty(child.board, child.player)
            if penalty > 0:
                score -= penalty / POSITION_PENALTY_SCALE
            if history.would_cause_repetition(child.board, child.player):
                score *= NEAR_REPETITION_FACTOR
            if score > best_score:
                best_score = score
                best_move = child.move

        if best_move is not None:
            state.mcts_recent_moves.append(best_move)
        logger.debug(
            f"MCTS {self.color.value}: {len(tree.nodes)} nodes, "
            f"best score {best_score:.2f}"
        )
        return best_move


def mcts_search(
    board: Board,
    color: PlayerColor,
    simulations: int,
    session: Optional[AISession] = None,
) -> Optional[Move]:
    """Pick a move for ``color`` after a fixed number of MCTS iterations."""
    ai = MCTSAI(color, AIConfig(use_mcts=True, mcts_simulations=simulations), session)
    return ai.search(board, simulations)


def mcts_search_timed(
    board: Board,
    color: PlayerColor,
    time_limit_ms: int,
    session: Optional[AISession] = None,
) -> Optional[Move]:
    """Pick a move for ``color`` after ``time_limit_ms`` of MCTS iterations."""
    ai = MCTSAI(color, AIConfig(use_mcts=True, time_limit=time_limit_ms), session)
    return ai.search_timed(board, time_limit_ms)


def get_mcts_move(
    board: Board,
    color: PlayerColor,
    config: AIConfig,
    session: Optional[AISession] = None,
) -> Optional[Move]:
    """Time-boxed search when ``config.time_limit`` is set, else count-boxed."""
    ai = MCTSAI(color, config, session, default_simulations=DEFAULT_MCTS_MOVE_SIMULATIONS)
    return ai.select_move(board)
