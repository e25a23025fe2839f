"""
Tests for store metrics, graph export and configuration.
"""

import logging
import os

import numpy as np
import pytest
from cogspace import AtomSpace, AtomType, MindAgent, TruthValue
from cogspace.config import CogSpaceConfig, setup_logging
from cogspace.utils import compute_metrics, get_degree_distribution, to_networkx


ENV_KEYS = ("COGSPACE_EMBEDDING_DIM", "COGSPACE_MAX_NAME_LENGTH",
            "COGSPACE_LOG_LEVEL", "COGSPACE_AGENT_FREQUENCY")


@pytest.fixture
def clean_env():
    """Keep COGSPACE_ variables loaded from .env files out of other tests."""
    for key in ENV_KEYS:
        os.environ.pop(key, None)
    yield
    for key in ENV_KEYS:
        os.environ.pop(key, None)


@pytest.fixture
def atomspace():
    space = AtomSpace()
    dog = space.add(AtomType.CONCEPT_NODE, "Dog", TruthValue(0.9, 0.8))
    animal = space.add(AtomType.CONCEPT_NODE, "Animal", TruthValue(0.7, 0.6))
    space.add(AtomType.INHERITANCE_LINK, "Dog->Animal", TruthValue(0.8, 0.4), [dog, animal])
    return space


class TestMetrics:
    """Test compute_metrics and degree distribution."""

    def test_empty_store(self):
        """Test metrics of an empty store are all zero."""
        metrics = compute_metrics(AtomSpace())

        assert metrics['num_atoms'] == 0
        assert metrics['num_links'] == 0
        assert metrics['mean_incoming'] == 0.0
        assert metrics['dangling_references'] == 0

    def test_counts(self, atomspace):
        """Test atom and per-type counts."""
        metrics = compute_metrics(atomspace)

        assert metrics['num_atoms'] == 3
        assert metrics['num_links'] == 1
        assert metrics['type_counts']['CONCEPT_NODE'] == 2
        assert metrics['type_counts']['INHERITANCE_LINK'] == 1
        assert metrics['type_counts']['SIMILARITY_LINK'] == 0

    def test_truth_value_means(self, atomspace):
        """Test mean strength and confidence across atoms."""
        metrics = compute_metrics(atomspace)

        assert np.isclose(metrics['mean_strength'], 0.8)
        assert np.isclose(metrics['mean_confidence'], 0.6)

    def test_degree_distribution(self, atomspace):
        """Test incoming degrees in id order."""
        degrees = get_degree_distribution(atomspace)

        assert degrees.shape == (3,)
        assert list(degrees) == [1, 1, 0]
        assert np.isclose(compute_metrics(atomspace)['mean_incoming'], 2 / 3)

    def test_dangling_references(self, atomspace):
        """Test outgoing ids left behind by removal are counted."""
        atomspace.add(AtomType.EVALUATION_LINK, "ghost", TruthValue(0.5, 0.5), [1, 999])

        assert compute_metrics(atomspace)['dangling_references'] == 1


class TestNetworkxExport:
    """Test to_networkx."""

    def test_nodes_and_edges(self, atomspace):
        """Test one node per atom and one edge per resolvable argument."""
        G = to_networkx(atomspace)

        assert G.number_of_nodes() == 3
        assert G.number_of_edges() == 2
        assert G.nodes[3]['type'] == "INHERITANCE_LINK"
        assert G.nodes[1]['name'] == "Dog"
        assert G.nodes[1]['strength'] == pytest.approx(0.9)
        assert sorted(d['position'] for _, _, d in G.out_edges(3, data=True)) == [0, 1]

    def test_dangling_edges_skipped(self, atomspace):
        """Test unresolvable outgoing ids produce no edge."""
        atomspace.add(AtomType.EVALUATION_LINK, "ghost", TruthValue(0.5, 0.5), [1, 999])

        G = to_networkx(atomspace)

        assert 999 not in G
        assert G.number_of_edges() == 3


class TestConfig:
    """Test CogSpaceConfig and setup_logging."""

    def test_defaults(self, clean_env, tmp_path):
        """Test defaults apply when nothing is set."""
        config = CogSpaceConfig.from_env(env_file=tmp_path / "missing.env")

        assert config == CogSpaceConfig()
        assert config.max_name_length == 255

    def test_env_file(self, clean_env, tmp_path):
        """Test values are read from a .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("COGSPACE_EMBEDDING_DIM=64\nCOGSPACE_LOG_LEVEL=debug\n")

        config = CogSpaceConfig.from_env(env_file=env_file)

        assert config.embedding_dim == 64
        assert config.log_level == "DEBUG"

    def test_environment_wins(self, clean_env, monkeypatch, tmp_path):
        """Test already-set variables override the file."""
        monkeypatch.setenv("COGSPACE_MAX_NAME_LENGTH", "16")
        env_file = tmp_path / ".env"
        env_file.write_text("COGSPACE_MAX_NAME_LENGTH=32\n")

        config = CogSpaceConfig.from_env(env_file=env_file)
        space = AtomSpace.from_config(config)

        assert space.max_name_length == 16
        atom_id = space.add(AtomType.CONCEPT_NODE, "x" * 40, TruthValue(0.5, 0.5))
        assert space.get(atom_id).name == "x" * 16

    def test_invalid_integer(self, clean_env, monkeypatch, tmp_path):
        """Test a non-integer value names the offending variable."""
        monkeypatch.setenv("COGSPACE_AGENT_FREQUENCY", "often")

        with pytest.raises(ValueError, match="COGSPACE_AGENT_FREQUENCY"):
            CogSpaceConfig.from_env(env_file=tmp_path / "missing.env")

    def test_setup_logging_idempotent(self):
        """Test repeated setup installs a single handler."""
        logger = setup_logging(logging.DEBUG)
        setup_logging("INFO")

        ours = [h for h in logger.handlers if h.get_name() == "cogspace"]
        assert len(ours) == 1
        assert logger.level == logging.INFO

    def test_setup_logging_from_config(self):
        """Test the config's log_level is applied."""
        logger = setup_logging(CogSpaceConfig(log_level="DEBUG"))

        assert logger.level == logging.DEBUG
        setup_logging(logging.INFO)

    def test_agent_frequency_from_env(self, clean_env, monkeypatch, tmp_path):
        """Test COGSPACE_AGENT_FREQUENCY reaches agents built from config."""
        monkeypatch.setenv("COGSPACE_AGENT_FREQUENCY", "4")
        config = CogSpaceConfig.from_env(env_file=tmp_path / "missing.env")

        agent = MindAgent.from_config(config, "A", lambda atomspace: None)

        assert agent.frequency == 4


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
