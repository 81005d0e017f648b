from pathlib import Path


class PathManager:
    def __init__(self, base_dir=None):
        if base_dir is None:
            # Default to the experiment root: the current working directory
            self.base_dir = Path.cwd()
        else:
            self.base_dir = Path(base_dir)

        # Main directories at experiment root
        self.configs_dir = self.base_dir / "configs"
        self.stimuli_dir = self.base_dir / "stimuli"

    def get_config_path(self, profile_name, fmt="yaml"):
        """Get path of the config file for a profile"""
        suffix = {"yaml": ".yaml", "json": ".json", "js": ".js"}[fmt]
        return self.configs_dir / f"{profile_name}{suffix}"

    def get_js_module_path(self):
        """Get path of the magpie.config.js module the frontend imports"""
        return self.base_dir / "src" / "magpie.config.js"

    def get_stimuli_path(self, relative_path):
        """Get absolute path of a stimuli file given relative to the experiment root"""
        return self.base_dir / relative_path
