from pathlib import Path

from config.schema import LaunchConfig, LecternConfig


# Vorlage für lecture/main.tex. Der Lektionen-Block wird von Lectern gepflegt,
# die Markierungszeilen dürfen nicht entfernt werden.
DEFAULT_LECTURE_TEMPLATE = r"""\documentclass[11pt]{article}
\usepackage[margin=1in]{geometry}
\usepackage{amsmath, amssymb, amsthm}
\usepackage{graphicx}
\graphicspath{ {figures/} }

\newcommand{\lesson}[2]{\section*{Lesson #1: #2}\addcontentsline{toc}{section}{Lesson #1: #2}}

\title{ {{ title }} }
\author{ {{ prof }} }
\date{ {{ semester }} }

% Kurs: {{ name }}
% Ablage: {{ notebook }}

\begin{document}
    \maketitle
    \tableofcontents

    % start lessons
    % end lessons
\end{document}
"""

# Vorlage für homework<N>/homework<N>.tex
DEFAULT_HOMEWORK_TEMPLATE = r"""\documentclass[11pt]{article}
\usepackage[margin=1in]{geometry}
\usepackage{amsmath, amssymb, amsthm}
\usepackage{enumitem}

\title{ {{ course }} Homework {{ number }} }
\date{}

\begin{document}
    \maketitle

    \begin{enumerate}
        \item
    \end{enumerate}
\end{document}
"""

LECTURE_TEMPLATE_NAME = "lecture_template.tex"
HOMEWORK_TEMPLATE_NAME = "homework_template.tex"


def default_config(root: Path, config_dir: Path) -> LecternConfig:
    """Standard-Konfiguration: Vorlagen liegen im Konfigurationsverzeichnis."""
    return LecternConfig(
        root=root,
        lecture_template=config_dir / LECTURE_TEMPLATE_NAME,
        homework_template=config_dir / HOMEWORK_TEMPLATE_NAME,
        launch=LaunchConfig(),
    )
