# src/atlas_taskflow/core/__init__.py
"""
Core do Atlas TaskFlow.

Contém o modelo de execução (Task/Result/Run), a cadeia de middlewares,
o engine de Workflows e as camadas transversais de configuração,
correlação e rastreabilidade. Nenhum módulo do core conhece regras de
negócio concretas.
"""
