import os
import logging
from admin_panel import create_app, db
from admin_panel.models import User, Role, HistoryLog

# Custom colored logging formatter
class ColoredFormatter(logging.Formatter):
    """Custom formatter to add colors to log levels"""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'       # Reset color
    }

    def format(self, record):
        original_format = super().format(record)

        level_name = record.levelname
        if level_name in self.COLORS:
            colored_level = f"{self.COLORS[level_name]}{level_name}{self.COLORS['RESET']}"
            return original_format.replace(level_name, colored_level, 1)

        return original_format

def setup_colored_logging(app):
    """Colour the console handlers of the root and app loggers when attached to a terminal."""
    if not (os.getenv('TERM') or os.getenv('COLORTERM')):
        return

    colored_formatter = ColoredFormatter(
        fmt='%(asctime)s %(name)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    for handler in logging.getLogger().handlers + app.logger.handlers:
        if type(handler) is logging.StreamHandler:
            handler.setFormatter(colored_formatter)

# The configuration class is picked from FLASK_ENV inside create_app().
app = create_app()

setup_colored_logging(app)

@app.shell_context_processor
def make_shell_context():
    """Names available in `flask shell`."""
    return {
        'db': db,
        'User': User,
        'Role': Role,
        'HistoryLog': HistoryLog,
    }


if __name__ == '__main__':
    # Development server only; production runs under a WSGI server such as Gunicorn.
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
