from nizk.config import DEFAULT_CONFIG, ProverConfig, WitnessFormat
from nizk.plonk.field import CURVE_ORDER


class TestWitnessFormat:
    def test_defaults(self):
        fmt = WitnessFormat()
        assert fmt.magic == b"wtns"
        assert fmt.max_version == 2
        assert fmt.field_size == 32
        assert fmt.header_size == 40
        assert fmt.check_modulus is False

    def test_modulus_is_scalar_field(self):
        assert WitnessFormat().modulus == CURVE_ORDER


class TestProverConfig:
    def test_default_label(self):
        assert DEFAULT_CONFIG.transcript_label == b"nizk_plonk"

    def test_str_label_encoded(self):
        assert ProverConfig(transcript_label="abc").transcript_label == b"abc"

    def test_from_env(self):
        config = ProverConfig.from_env({
            "NIZK_TRANSCRIPT_LABEL": "env-label",
            "NIZK_CHECK_MODULUS": "Yes",
        })
        assert config.transcript_label == b"env-label"
        assert config.witness_format.check_modulus is True

    def test_from_env_empty(self):
        assert ProverConfig.from_env({}) == ProverConfig()

    def test_from_env_falsy_switch(self):
        config = ProverConfig.from_env({"NIZK_CHECK_MODULUS": "0"})
        assert config.witness_format.check_modulus is False

    def test_from_mapping_non_string_label(self):
        config = ProverConfig.from_mapping({"TRANSCRIPT_LABEL": 123})
        assert config.transcript_label == b"123"
