"""Default configuration settings for savepoint."""

DEFAULT_CONFIG = {
	# Remote to sync with and push to
	"remote": "origin",
	# Optional path of a file that receives debug logs
	"log_file": None,
	"commit": {
		# Generated messages read "<prefix> <UTC timestamp>"
		"message_prefix": "chore: savepoint",
	},
	"sync": {
		# Fetch and rebase-pull before pushing; --no-pull overrides this
		"enabled": True,
	},
}
