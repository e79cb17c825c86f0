from pydantic import BaseModel, model_validator

from portfolio_api.utils.list_fields import load_string_list, normalize_string_list


class WritePayload(BaseModel):
    """Base for create/update bodies; blank strings count as omitted."""

    model_config = {"str_strip_whitespace": True}

    @model_validator(mode="before")
    @classmethod
    def drop_blank_values(cls, data):
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if not (isinstance(value, str) and not value.strip())
            }
        return data


def string_list_input(value):
    return normalize_string_list(value)


def string_list_output(value):
    return load_string_list(value)
