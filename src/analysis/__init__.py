"""Manifest checks.

- checks.py: built-in check factories for Config.add_check
- policy_rules.py: rule type registry used to build checks from policy config
- policy_runner.py: policy loading, presets and check execution
"""
