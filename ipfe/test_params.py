import dataclasses

import pytest

from ipfe.errors import InvalidParameters
from ipfe.params import (
    GroupParameters, RFC5114_PARAMS, TOY_PARAMS, initialize_parameters, validate_params
)


def test_known_groups_are_valid():
    assert validate_params(TOY_PARAMS)
    assert validate_params(RFC5114_PARAMS)


def test_initialize_parameters():
    assert initialize_parameters("toy") is TOY_PARAMS
    assert initialize_parameters(112) is RFC5114_PARAMS
    assert initialize_parameters("rfc5114") is RFC5114_PARAMS
    assert initialize_parameters() is RFC5114_PARAMS


def test_initialize_parameters_unknown_level():
    with pytest.raises(InvalidParameters):
        initialize_parameters(4096)
    # Les erreurs du paquet restent des ValueError
    with pytest.raises(ValueError):
        initialize_parameters("inconnu")


def test_structural_checks():
    with pytest.raises(InvalidParameters):
        GroupParameters(p=73, q=72, g=1)
    with pytest.raises(InvalidParameters):
        GroupParameters(p=73, q=72, g=73)
    with pytest.raises(InvalidParameters):
        GroupParameters(p=1, q=1, g=2)
    with pytest.raises(InvalidParameters):
        GroupParameters(p=73, q=0, g=15)


def test_validate_params_rejects_bad_groups():
    # Module composé : accepté à la construction, refusé à la validation
    assert not validate_params(GroupParameters(p=21, q=6, g=2))
    # q ne divise pas p - 1
    assert not validate_params(GroupParameters(p=73, q=71, g=15))
    # 15 est d'ordre 72, pas 36
    assert not validate_params(GroupParameters(p=73, q=36, g=15))


def test_parameters_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        TOY_PARAMS.p = 79
