"""Plugin wrapper source generation.

Every script plugin gets a small generated wrapper type implementing
the host plugin contract. The wrapper does not reference the compiled
script type directly: it looks the class up by name when the plugin is
applied and constructs it with the project it is applied to, so the
wrapper compiles independently of the scripts.
"""

from textwrap import dedent
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from .descriptor import ScriptPlugin

#: Host type passed to plugins and to compiled script constructors.
PROJECT_TYPE = 'org.gradle.api.Project'

#: Extension of generated wrapper sources.
WRAPPER_EXTENSION = '.kt'

WRAPPER_TEMPLATE = '''
    import org.gradle.api.Plugin

    class {implementation_class} : Plugin<{project_type}> {{
        override fun apply(target: {project_type}) {{
            Class
                .forName("{compiled_script_type_name}")
                .getDeclaredConstructor({project_type}::class.java)
                .newInstance(target)
        }}
    }}
'''


def render_wrapper(plugin: 'ScriptPlugin', project_type: str = PROJECT_TYPE) -> str:
    """Render the wrapper source of a script plugin.

    The template indentation is stripped, so the output does not
    depend on how the template is indented here.

    Args:
        plugin: Script plugin descriptor.
        project_type: Fully-qualified host project type.

    Returns:
        Wrapper source text.
    """
    source = WRAPPER_TEMPLATE.format(
        implementation_class=plugin.implementation_class,
        compiled_script_type_name=plugin.compiled_script_type_name,
        project_type=project_type,
    )

    return dedent(source).strip('\n') + '\n'


def write_wrapper(plugin: 'ScriptPlugin', output_dir: 'Path', *,
                  project_type: str = PROJECT_TYPE,
                  extension: str = WRAPPER_EXTENSION) -> 'Path':
    """Write the wrapper source of a script plugin.

    An existing file is overwritten. The same descriptor always
    produces the same bytes.

    Args:
        plugin: Script plugin descriptor.
        output_dir: Existing directory for generated sources.
        project_type: Fully-qualified host project type.
        extension: Wrapper file extension.

    Returns:
        Path of the written file.

    Raises:
        OSError: If the file cannot be written.
    """
    path = output_dir / f'{plugin.implementation_class}{extension}'
    path.write_text(render_wrapper(plugin, project_type), encoding='utf-8', newline='\n')

    return path
