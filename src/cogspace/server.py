"""
CogServer: cycle-driven scheduler for mind agents.

The server is bound to one AtomSpace (which it does not own) and advances
a cycle counter one tick at a time. On each tick every registered agent
whose frequency has elapsed since its last run is invoked, in registration
order, with the bound AtomSpace.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional

from cogspace.atoms import AtomSpace
from cogspace.atoms.types import MAX_AGENT_NAME_LENGTH

logger = logging.getLogger(__name__)


@dataclass
class MindAgent:
    """
    A unit of behaviour run periodically against the AtomSpace.

    Attributes:
        name: Label used in logs and state snapshots
        process: Callable invoked with the AtomSpace; return value ignored
        frequency: Run once every `frequency` cycles (>= 1)
        last_run: Cycle of the most recent run (0 = never)
        run_count: Number of times the agent has been dispatched
    """
    name: str
    process: Callable[[AtomSpace], None]
    frequency: int = 1
    last_run: int = 0
    run_count: int = 0

    def __post_init__(self):
        self.name = self.name[:MAX_AGENT_NAME_LENGTH]
        if not callable(self.process):
            raise TypeError(f"Agent {self.name!r} process must be callable")
        if self.frequency < 1:
            raise ValueError(
                f"Agent {self.name!r} frequency must be >= 1, got {self.frequency}")

    @classmethod
    def from_config(cls, config, name: str, process: Callable[[AtomSpace], None],
                    frequency: Optional[int] = None) -> "MindAgent":
        """
        Build an agent whose frequency defaults to the configured one.

        Args:
            config: CogSpaceConfig supplying default_agent_frequency
            name: Agent label
            process: Callable invoked with the AtomSpace
            frequency: Explicit frequency, overriding the config
        """
        if frequency is None:
            frequency = config.default_agent_frequency
        return cls(name, process, frequency=frequency)

    def is_due(self, cycle: int) -> bool:
        """Check whether enough cycles have elapsed since the last run."""
        return cycle - self.last_run >= self.frequency


class CogServer:
    """
    Scheduler dispatching mind agents against a shared AtomSpace.

    The `running` flag is toggled by start/stop but does not gate
    `advance_cycle`; cycles can be advanced in either state.

    Attributes:
        atomspace: Bound store (not owned)
        agents: Registered agents in registration order
        cycle_count: Number of cycles advanced so far
        running: Whether start() has been called more recently than stop()
        history: Records of which agents ran, newest last, capped at
            `history_size` entries
    """

    def __init__(self, atomspace: AtomSpace, record_history: bool = True,
                 history_size: Optional[int] = 1000):
        """
        Initialize a stopped server at cycle 0.

        Args:
            atomspace: Store every agent will operate on
            record_history: Whether advance_cycle appends to `history`
            history_size: Most recent cycles kept in `history` (None = unbounded)
        """
        self.atomspace = atomspace
        self.agents: List[MindAgent] = []
        self.cycle_count = 0
        self.running = False
        self.record_history = record_history
        self.history: Deque[Dict] = deque(maxlen=history_size)

        self.stats = {
            'agent_runs': 0,
            'agent_failures': 0
        }

    def register_agent(self, agent: MindAgent):
        """Append an agent to the dispatch list. Duplicates are allowed."""
        self.agents.append(agent)
        logger.info("Registered agent %r (frequency=%d)", agent.name, agent.frequency)

    def start(self):
        self.running = True
        logger.info("CogServer started at cycle %d", self.cycle_count)

    def stop(self):
        self.running = False
        logger.info("CogServer stopped at cycle %d", self.cycle_count)

    def advance_cycle(self) -> List[str]:
        """
        Advance one cycle and run every agent that is due.

        Agents run to completion one after another. An agent that raises
        is logged and counted as failed; the remaining agents still run
        and the failed agent's last_run is still updated.

        Returns:
            List[str]: Names of the agents dispatched this cycle, in order
        """
        self.cycle_count += 1
        cycle = self.cycle_count
        agents_run = []

        for agent in list(self.agents):
            if not agent.is_due(cycle):
                continue

            logger.debug("Cycle %d: running agent %r", cycle, agent.name)
            try:
                agent.process(self.atomspace)
            except Exception:
                self.stats['agent_failures'] += 1
                logger.exception("Agent %r failed at cycle %d", agent.name, cycle)

            agent.last_run = cycle
            agent.run_count += 1
            self.stats['agent_runs'] += 1
            agents_run.append(agent.name)

        if self.record_history:
            self.history.append({'cycle': cycle, 'agents_run': agents_run})

        return agents_run

    def run_cycles(self, num_cycles: int, verbose: bool = False,
                   log_interval: int = 1) -> List[Dict]:
        """
        Advance several cycles.

        Args:
            num_cycles: Number of cycles to advance
            verbose: Whether to print progress
            log_interval: Print progress every N cycles

        Returns:
            List of {'cycle', 'agents_run'} records, one per cycle
        """
        results = []

        for step in range(num_cycles):
            agents_run = self.advance_cycle()
            results.append({'cycle': self.cycle_count, 'agents_run': agents_run})

            if verbose and (step + 1) % log_interval == 0:
                print(f"Cycle {self.cycle_count}: "
                      f"agents={agents_run}, "
                      f"atoms={len(self.atomspace)}")

        return results

    def shutdown(self):
        """Stop the server and drop every agent. The AtomSpace is untouched."""
        self.stop()
        self.agents.clear()

    def get_state(self) -> Dict:
        """
        Get current scheduler state.

        Returns:
            dict: Cycle count, running flag, per-agent bookkeeping and stats
        """
        return {
            'cycle_count': self.cycle_count,
            'running': self.running,
            'agents': [
                {
                    'name': agent.name,
                    'frequency': agent.frequency,
                    'last_run': agent.last_run,
                    'run_count': agent.run_count
                }
                for agent in self.agents
            ],
            'stats': self.stats.copy()
        }

    def __repr__(self):
        return (f"CogServer(cycle={self.cycle_count}, "
                f"agents={len(self.agents)}, running={self.running})")
