# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas TaskFlow.

Este módulo define fixtures reutilizáveis que fornecem:
- settings isolados por teste (reset antes e depois)
- Correlator limpo na thread principal
- YAMLs de configuração semelhantes ao uso real do projeto
- um contador thread-safe para Tasks paralelas

Decisões arquiteturais:
    - Estado de processo (settings, correlator) é sempre restaurado
    - Tasks de teste reutilizáveis vivem em `tests/fixtures/tasks.py`
      (nível de módulo, exigido por grupos executados em processos)

Limites explícitos:
    - Nenhuma fixture executa Workflow real
    - Nenhuma fixture realiza I/O fora de `tmp_path`
"""

import threading

import pytest


@pytest.fixture(autouse=True)
def _isolated_process_state():
    """Restaura settings e limpa o Correlator da thread principal a cada teste."""
    from atlas_taskflow.core import correlator
    from atlas_taskflow.core.config.settings import reset_settings

    reset_settings()
    correlator.clear()
    yield
    reset_settings()
    correlator.clear()


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de defaults semelhante ao `taskflow.defaults.yaml` de um projeto.

    Returns:
        str: Conteúdo YAML com a base completa de settings.
    """
    return """\
task:
  breakpoints: [failed]
workflow:
  breakpoints: [failed]
timeout:
  seconds: 3
logging:
  level: INFO
  logger: atlas_taskflow
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de overrides locais (apenas o que muda)."""
    return """\
workflow:
  breakpoints: [failed, skipped]
timeout:
  seconds: 0.5
logging:
  level: DEBUG
"""


# =====================================================
# Concorrência
# =====================================================

class SafeCounter:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.value = 0

    def increment(self) -> None:
        with self._lock:
            self.value += 1


@pytest.fixture
def safe_counter() -> SafeCounter:
    return SafeCounter()
