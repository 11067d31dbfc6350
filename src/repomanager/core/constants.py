"""Default values shared by the scaffolding pipeline and the CLI."""

DEFAULT_TEMPLATE_URL = "https://github.com/kemadev/repo-tmpl"
DEFAULT_TEMPLATE_ROOT = "template"
DEFAULT_FIXED_SUBDIRECTORY = "template/go-app"
DEFAULT_PLACEHOLDER = "REPONAMETMPL"
DEFAULT_REMOTE = "origin"
DEFAULT_FETCH_TIMEOUT = 300.0

SCRATCH_PREFIX = "init-repo-"
GIT_DIR_NAME = ".git"
