from __future__ import annotations


class ModelAgentError(Exception):
    """model-agent 공통 예외."""


class CodegenError(ModelAgentError):
    """생성된 코드가 유효한 Python이 아닐 때. (생성기 버그)"""
