"""Tests for configuration, devices and random sources."""

import importlib

import pytest
import torch

from qvsim import config as config_module
from qvsim.config import DeviceTiming, SimulatorConfig
from qvsim.core.device import Device, default_device, device, resolve_device
from qvsim.core.rng import make_generator, uniform, uniforms


class TestDeviceTiming:
    def test_defaults(self):
        timing = DeviceTiming()
        assert timing.duration(1) == 0.020
        assert timing.duration(2) == 0.050
        assert timing.duration(5) == 0.050
        assert timing.duration(0) == 0.020

    def test_rejects_negative(self):
        with pytest.raises(ValueError):
            DeviceTiming(single_qubit_gate_time=-1.0)

    def test_frozen(self):
        with pytest.raises(Exception):
            DeviceTiming().single_qubit_gate_time = 1.0


class TestSimulatorConfig:
    def test_defaults(self):
        cfg = SimulatorConfig()
        assert cfg.strict_gates is True
        assert cfg.device == "sv_cpu"
        assert cfg.max_qubits == config_module.DEFAULT_MAX_QUBITS

    @pytest.mark.parametrize("kwargs", [{"max_qubits": -1}, {"default_shots": 0}])
    def test_validation(self, kwargs):
        with pytest.raises(ValueError):
            SimulatorConfig(**kwargs)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("QVSIM_MAX_QUBITS", "12")
        monkeypatch.setenv("QVSIM_DEFAULT_SHOTS", "99")
        try:
            reloaded = importlib.reload(config_module)
            assert reloaded.DEFAULT_MAX_QUBITS == 12
            assert reloaded.DEFAULT_SHOTS == 99
        finally:
            monkeypatch.delenv("QVSIM_MAX_QUBITS")
            monkeypatch.delenv("QVSIM_DEFAULT_SHOTS")
            importlib.reload(config_module)

    def test_env_override_must_be_int(self, monkeypatch):
        monkeypatch.setenv("QVSIM_MAX_QUBITS", "lots")
        try:
            with pytest.raises(ValueError, match="QVSIM_MAX_QUBITS"):
                importlib.reload(config_module)
        finally:
            monkeypatch.delenv("QVSIM_MAX_QUBITS")
            importlib.reload(config_module)


class TestDevice:
    def test_sv_cpu(self):
        dev = device("sv_cpu")
        assert isinstance(dev, Device)
        assert dev.as_torch_device() == torch.device("cpu")
        assert dev.dtype == torch.float64

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unsupported device name"):
            device("tpu")

    @pytest.mark.skipif(torch.cuda.is_available(), reason="CUDA present")
    def test_cuda_unavailable(self):
        with pytest.raises(RuntimeError):
            device("sv_cuda")

    def test_resolve(self):
        assert resolve_device(None).name == default_device().name
        assert resolve_device("sv_cpu").name == "sv_cpu"
        assert resolve_device(torch.device("cpu")).name == "sv_cpu"
        with pytest.raises(TypeError):
            resolve_device(3)


class TestRandomSource:
    def test_seeded_generators_agree(self):
        a = make_generator(42)
        b = make_generator(42)
        assert uniform(a) == uniform(b)
        assert torch.equal(uniforms(5, a), uniforms(5, b))

    def test_range(self, torch_rng):
        draws = uniforms(1000, torch_rng)
        assert draws.dtype == torch.float64
        assert float(draws.min()) >= 0.0
        assert float(draws.max()) < 1.0
