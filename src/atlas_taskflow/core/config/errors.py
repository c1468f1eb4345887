# src/atlas_taskflow/core/config/errors.py
"""
Exceções tipadas da camada de configuração do Atlas TaskFlow.

Todas as falhas de carregamento, validação estrutural e resolução de
configuração derivam de `ConfigError`, permitindo captura genérica sem
confundir erros de configuração com falhas de execução de Tasks.
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Atlas TaskFlow.

    Limites explícitos:
        - Não representa falha de negócio (essas viram Results)
        - Não representa erro de execução de Task ou Workflow
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    não é encontrado no caminho especificado.

    Invariantes:
        - Sem defaults não existe configuração efetiva carregada de arquivo
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"timeout": {"seconds": 3}}
        - override: {"timeout": "slow"}

    Números (int/float) são compatíveis entre si; `None` na base aceita
    qualquer override.
    """
