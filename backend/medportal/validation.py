from pydantic import ValidationError

from .errors import ValidationFailed


def _field_name(loc):
    return ".".join(str(part) for part in loc) if loc else "body"


def parse(schema, payload):
    """
    Valida o payload contra o esquema inserível e devolve a instância parseada.
    Strings numéricas viram inteiros e datas ISO-8601 viram datetime;
    qualquer outra divergência gera ValidationFailed com o detalhe por campo.
    """
    if not isinstance(payload, dict):
        raise ValidationFailed(
            [{"field": "body", "message": "Expected a JSON object"}]
        )
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        errors = [
            {"field": _field_name(err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationFailed(errors) from e
