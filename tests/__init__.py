"""Test suite for piccadilly.

Test Structure:
- unit/: Unit tests mirroring packages/piccadilly
  - sequencer/: Sequence planner
  - formats/: ffmpeg concat manifest writer
  - encoder/: ffmpeg invocation
  - config/: Config models and loader
  - cli/: Argument parsing and end-to-end runs with a fake encoder
- fakes.py: Test doubles (FakeEncoder)
- conftest.py: Shared fixtures
"""
