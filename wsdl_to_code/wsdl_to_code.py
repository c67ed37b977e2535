import json
from pathlib import Path

import click

from .cli_utils import configure_logging
from .pipeline import CodeGeneratorConfig, DocumentParser, ErrorPolicy, GenerationError, OutputMode, PipelineGenerator


@click.command()
@click.option("--name", "-n", default=None, type=str, help="Name of the generation unit (defaults to the first input file name)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--language", "-l", default="python", type=click.Choice(["python", "php"]))
@click.option("--namespace", default=None, type=str, help="Code namespace for definitions without a namespace_map entry")
@click.option("--force", is_flag=True, default=False, help="Overwrite the output file if it exists")
@click.option("--skip-errors", is_flag=True, default=False, help="Skip definitions that fail to generate instead of aborting")
@click.option("--format", "format_code", is_flag=True, default=False, help="Format Python output with the configured formatter")
@click.option("--verbose", "-v", count=True, help="Increase logging verbosity (-v info, -vv debug)")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", type=click.Path(dir_okay=False, resolve_path=True))
def wsdl_to_code(name, config, language, namespace, force, skip_errors, format_code, verbose, paths, output):
    configure_logging(verbose)

    if config is not None:
        with open(config) as f:
            config = json.load(f)
            config = CodeGeneratorConfig.from_dict(config)
    else:
        config = CodeGeneratorConfig()

    # CLI flags override the config file
    if namespace is not None:
        config.default_namespace = namespace
    if force:
        config.output.mode = OutputMode.FORCE
    if skip_errors:
        config.on_definition_error = ErrorPolicy.SKIP
    if format_code:
        config.formatter.enabled = True

    if name is None:
        name = Path(paths[0]).stem

    try:
        documents = DocumentParser().parse_files(paths)
        codegen = PipelineGenerator(name, documents, config, language)
        codegen.write(output)
    except (GenerationError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e

    for failure in codegen.analyze().failures:
        click.echo(f"Skipped {failure.kind} {failure.name}: {failure.error}", err=True)
