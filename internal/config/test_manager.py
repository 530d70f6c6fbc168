"""
Tests for the Configuration Manager.

Covers configuration loading, merging of config directories, environment
variable substitution, API key validation and section accessors.
"""

import tempfile
from pathlib import Path

import pytest

from internal.config.manager import ConfigManager, substituteEnvVars

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def tempDir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sampleConfigToml():
    """Provide sample valid TOML configuration."""
    return """
[openweathermap]
api-key = "test_api_key_123"
request-timeout = 5

[cache]
ttl = 900
max-size = 50

[logging]
level = "INFO"
"""


@pytest.fixture
def defaultsToml():
    """Provide default configuration TOML."""
    return """
[openweathermap]
api-key = "default_key"
geocoding-limit = 5

[map]
zoom = 2
default-layer = "precipitation_new"
"""


@pytest.fixture
def missingApiKeyToml():
    """Provide TOML missing required API key."""
    return """
[cache]
ttl = 900

[logging]
level = "INFO"
"""


# ============================================================================
# Helper Functions
# ============================================================================


def createConfigFile(directory: Path, filename: str, content: str) -> Path:
    """Create a TOML config file in the specified directory."""
    filePath = directory / filename
    filePath.write_text(content)
    return filePath


def createConfigDir(baseDir: Path, dirName: str, files: dict) -> Path:
    """Create a config directory with multiple TOML files."""
    configDir = baseDir / dirName
    configDir.mkdir(parents=True, exist_ok=True)

    for filename, content in files.items():
        createConfigFile(configDir, filename, content)

    return configDir


def createManager(configPath: Path, tempDir: Path, **kwargs) -> ConfigManager:
    """Create manager which does not read a .env from the working directory."""
    return ConfigManager(str(configPath), dotEnvFile=str(tempDir / ".env"), **kwargs)


# ============================================================================
# Loading Tests
# ============================================================================


class TestConfigurationLoading:
    """Test configuration loading from TOML files."""

    def testLoadSingleConfigFile(self, tempDir, sampleConfigToml):
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)

        manager = createManager(configPath, tempDir)

        assert manager.config_path == str(configPath)
        assert manager.getApiKey() == "test_api_key_123"
        assert manager.getOpenWeatherMapConfig()["request-timeout"] == 5
        assert manager.getCacheConfig() == {"ttl": 900, "max-size": 50}
        assert manager.getLoggingConfig()["level"] == "INFO"

    def testMissingSectionsAreEmpty(self, tempDir, sampleConfigToml):
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)

        manager = createManager(configPath, tempDir)

        assert manager.getLocationConfig() == {}
        assert manager.getMapConfig() == {}
        assert manager.get("unknown", "fallback") == "fallback"

    def testInitWithoutConfigFile(self, tempDir, defaultsToml):
        """Config directories alone are enough."""
        configDir = createConfigDir(tempDir, "defaults", {"defaults.toml": defaultsToml})

        manager = createManager(tempDir / "nonexistent.toml", tempDir, configDirs=[str(configDir)])

        assert manager.getApiKey() == "default_key"
        assert manager.getMapConfig()["default-layer"] == "precipitation_new"

    def testInitWithNonExistentConfigAndNoDirs(self, tempDir):
        with pytest.raises(SystemExit):
            createManager(tempDir / "nonexistent.toml", tempDir)

    def testInvalidSyntax(self, tempDir):
        configPath = createConfigFile(tempDir, "config.toml", "[openweathermap\napi-key = 'x'")

        with pytest.raises(SystemExit):
            createManager(configPath, tempDir)

    def testBrokenFileInConfigDirIsSkipped(self, tempDir, sampleConfigToml):
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(tempDir, "configs", {"broken.toml": "[map\nzoom = 3"})

        manager = createManager(configPath, tempDir, configDirs=[str(configDir)])

        assert manager.getApiKey() == "test_api_key_123"
        assert manager.getMapConfig() == {}


# ============================================================================
# Merging Tests
# ============================================================================


class TestConfigurationMerging:
    """Test configuration merging logic."""

    def testConfigDirsOverrideMainConfig(self, tempDir, sampleConfigToml, defaultsToml):
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(tempDir, "defaults", {"defaults.toml": defaultsToml})

        manager = createManager(configPath, tempDir, configDirs=[str(configDir)])

        # Config dirs are merged on top of the main config
        assert manager.getApiKey() == "default_key"
        # Values only present in main config survive
        assert manager.getOpenWeatherMapConfig()["request-timeout"] == 5
        assert manager.getOpenWeatherMapConfig()["geocoding-limit"] == 5
        assert manager.getMapConfig()["zoom"] == 2

    def testMergePriority(self, tempDir, sampleConfigToml):
        """Later files override earlier ones."""
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(
            tempDir,
            "configs",
            {
                "01-first.toml": "[map]\nzoom = 3\ndefault-layer = 'wind_new'",
                "02-second.toml": "[map]\nzoom = 4",
            },
        )

        manager = createManager(configPath, tempDir, configDirs=[str(configDir)])

        assert manager.getMapConfig() == {"zoom": 4, "default-layer": "wind_new"}

    def testNestedConfigDirs(self, tempDir, sampleConfigToml):
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(tempDir, "configs", {})
        createConfigDir(configDir, "nested", {"location.toml": "[location]\nlatitude = 51.5\nlongitude = -0.12"})

        manager = createManager(configPath, tempDir, configDirs=[str(configDir)])

        assert manager.getLocationConfig() == {"latitude": 51.5, "longitude": -0.12}

    def testNonExistentConfigDirIsSkipped(self, tempDir, sampleConfigToml):
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)

        manager = createManager(configPath, tempDir, configDirs=[str(tempDir / "missing")])

        assert manager.getApiKey() == "test_api_key_123"


# ============================================================================
# Validation and Environment Tests
# ============================================================================


class TestConfigurationValidation:
    """Test configuration validation."""

    def testMissingApiKey(self, tempDir, missingApiKeyToml):
        configPath = createConfigFile(tempDir, "config.toml", missingApiKeyToml)

        with pytest.raises(SystemExit):
            createManager(configPath, tempDir)

    def testPlaceholderApiKey(self, tempDir):
        configPath = createConfigFile(tempDir, "config.toml", '[openweathermap]\napi-key = "YOUR_API_KEY_HERE"')

        with pytest.raises(SystemExit):
            createManager(configPath, tempDir)

    def testUnresolvedEnvApiKey(self, tempDir, monkeypatch):
        monkeypatch.delenv("SKYCAST_TEST_UNSET_KEY", raising=False)
        configPath = createConfigFile(
            tempDir, "config.toml", '[openweathermap]\napi-key = "${SKYCAST_TEST_UNSET_KEY}"'
        )

        with pytest.raises(SystemExit):
            createManager(configPath, tempDir)

    def testApiKeyFromEnvironment(self, tempDir, monkeypatch):
        monkeypatch.setenv("SKYCAST_TEST_API_KEY", "env_key")
        configPath = createConfigFile(tempDir, "config.toml", '[openweathermap]\napi-key = "${SKYCAST_TEST_API_KEY}"')

        manager = createManager(configPath, tempDir)

        assert manager.getApiKey() == "env_key"

    def testApiKeyFromDotEnv(self, tempDir, monkeypatch):
        monkeypatch.delenv("SKYCAST_DOTENV_KEY", raising=False)
        createConfigFile(tempDir, ".env", 'SKYCAST_DOTENV_KEY="dotenv_key"\n')
        configPath = createConfigFile(tempDir, "config.toml", '[openweathermap]\napi-key = "${SKYCAST_DOTENV_KEY}"')

        manager = createManager(configPath, tempDir)

        assert manager.getApiKey() == "dotenv_key"
        monkeypatch.delenv("SKYCAST_DOTENV_KEY", raising=False)


class TestSubstituteEnvVars:
    def testNestedStructures(self, monkeypatch):
        monkeypatch.setenv("SKYCAST_TEST_VALUE", "42")

        result = substituteEnvVars({"a": "${SKYCAST_TEST_VALUE}", "b": ["x-${SKYCAST_TEST_VALUE}", 1], "c": True})

        assert result == {"a": "42", "b": ["x-42", 1], "c": True}

    def testUnknownVariableIsKept(self, monkeypatch):
        monkeypatch.delenv("SKYCAST_TEST_MISSING", raising=False)

        assert substituteEnvVars("${SKYCAST_TEST_MISSING}") == "${SKYCAST_TEST_MISSING}"
