"""Tests for environment variable expansion utilities."""

import os
from unittest.mock import patch

from nanobox_ec2.config.env_expansion import expand_env_vars


class TestEnvironmentVariableExpansion:
    """Test environment variable expansion functionality."""

    def test_expand_simple_env_var(self):
        with patch.dict(os.environ, {"TEST_VAR": "us-east-2"}):
            assert expand_env_vars("$TEST_VAR") == "us-east-2"

    def test_expand_braced_env_var_with_suffix(self):
        with patch.dict(os.environ, {"TEST_VAR": "/var/log"}):
            assert expand_env_vars("${TEST_VAR}/nanobox.log") == "/var/log/nanobox.log"

    def test_expand_nonexistent_env_var(self):
        with patch.dict(os.environ, {}, clear=True):
            assert expand_env_vars("$NONEXISTENT_VAR") == "$NONEXISTENT_VAR"

    def test_expand_nested_structures(self):
        with patch.dict(os.environ, {"TEST_VAR": "ops"}):
            config = {
                "aws": {"profile": "$TEST_VAR"},
                "names": ["$TEST_VAR-a", "plain"],
            }
            assert expand_env_vars(config) == {
                "aws": {"profile": "ops"},
                "names": ["ops-a", "plain"],
            }

    def test_expand_non_string_values(self):
        config = {"number": 42, "boolean": True, "none": None}
        assert expand_env_vars(config) == config
