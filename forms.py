"""
Request validation for the JSON API.

Bodies arrive with camelCase keys; each form lists the wire name of its
fields in ``aliases`` and is fed a MultiDict built from the body. Fields here
take JSON-typed values (numbers, booleans, null, ISO-8601 strings) rather
than the text inputs stock WTForms fields expect.
"""

import math
from datetime import datetime

from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import Field
from wtforms.validators import AnyOf, DataRequired, Length, NumberRange, StopValidation, ValidationError
from wtforms.widgets import TextInput

from models import ACTIVITY_CATEGORIES, EXPENSE_CATEGORIES, GOAL_CATEGORIES, GOAL_DIRECTIONS


def parse_timestamp(value):
    """ISO-8601 string to a naive local datetime."""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).strip())
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


class JSONField(Field):
    """Base for fields whose raw value is already a decoded JSON value."""

    widget = TextInput()

    def _value(self):
        return '' if self.data is None else str(self.data)

    def process_formdata(self, valuelist):
        if not valuelist or valuelist[0] is None:
            self.data = None
            return
        self.data = self.coerce(valuelist[0])

    def coerce(self, value):
        return value


class StringField(JSONField):

    def coerce(self, value):
        if not isinstance(value, str):
            raise ValueError(self.gettext('Not a valid string value.'))
        return value


class IntegerField(JSONField):

    def coerce(self, value):
        if isinstance(value, bool):
            raise ValueError(self.gettext('Not a valid integer value.'))
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip().lstrip('-').isdigit():
            return int(value)
        raise ValueError(self.gettext('Not a valid integer value.'))


class FloatField(JSONField):

    def coerce(self, value):
        if isinstance(value, bool):
            raise ValueError(self.gettext('Not a valid float value.'))
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValueError(self.gettext('Not a valid float value.'))
        if not math.isfinite(number):
            raise ValueError(self.gettext('Not a valid float value.'))
        return number


class BooleanField(JSONField):

    def coerce(self, value):
        if isinstance(value, bool):
            return value
        if value in ('true', 'false'):
            return value == 'true'
        raise ValueError(self.gettext('Not a valid boolean value.'))


class DateTimeField(JSONField):

    def coerce(self, value):
        try:
            return parse_timestamp(value)
        except (TypeError, ValueError):
            raise ValueError(self.gettext('Not a valid datetime value.'))


class Required:
    """Like InputRequired, but zero and false count as input."""

    field_flags = {'required': True}

    def __init__(self, message=None):
        self.message = message

    def __call__(self, form, field):
        if field.raw_data and field.raw_data[0] is not None and field.raw_data[0] != '':
            return
        field.errors[:] = []
        raise StopValidation(self.message or field.gettext("This field is required."))


class Nullable:
    """Ends the chain on null so later validators only see real values."""

    def __call__(self, form, field):
        if field.data is None:
            raise StopValidation()


class Positive:

    def __call__(self, form, field):
        if field.data is not None and field.data <= 0:
            raise ValidationError('Must be greater than 0.')


class ApiForm(FlaskForm):
    class Meta:
        csrf = False

    aliases = {}

    @classmethod
    def from_json(cls, payload, partial=False):
        """
        Build a form from a decoded JSON object.

        With ``partial`` only the keys present in the payload are validated,
        which is how PATCH bodies are checked.
        """
        if not isinstance(payload, dict):
            payload = {}
        wire_to_field = {wire: name for name, wire in cls.aliases.items()}
        formdata = MultiDict()
        for key, value in payload.items():
            # aliased fields are only read under their wire name
            if key in cls.aliases:
                continue
            formdata.add(wire_to_field.get(key, key), value)
        form = cls(formdata=formdata)
        form._present = [name for name in form._fields if name in formdata]
        if partial:
            for name in list(form._fields):
                if name not in formdata:
                    del form[name]
        return form

    def payload(self):
        """Validated data for the fields the client sent, keyed by column name."""
        return {name: self._fields[name].data for name in self._present if name in self._fields}

    def error_message(self):
        parts = []
        for name, errors in self.errors.items():
            wire = self.aliases.get(name, name)
            parts.append(f"{wire}: {' '.join(errors)}")
        return '; '.join(parts) or 'Invalid request body'


class UserForm(ApiForm):
    aliases = {'display_name': 'displayName', 'dark_mode': 'darkMode'}

    username = StringField(validators=[DataRequired(), Length(max=100)])
    password = StringField(validators=[DataRequired(), Length(min=4, max=128)])
    display_name = StringField(validators=[DataRequired(), Length(max=100)])
    dark_mode = BooleanField()


class ActivityForm(ApiForm):
    aliases = {'user_id': 'userId', 'start_time': 'startTime', 'end_time': 'endTime'}

    user_id = IntegerField(validators=[Required()])
    category = StringField(validators=[DataRequired(), AnyOf(ACTIVITY_CATEGORIES)])
    description = StringField()
    start_time = DateTimeField(validators=[Required()])
    end_time = DateTimeField()
    duration = IntegerField(validators=[Required(), NumberRange(min=0)])


class ExpenseForm(ApiForm):
    aliases = {'user_id': 'userId'}

    user_id = IntegerField(validators=[Required()])
    amount = FloatField(validators=[Required(), Positive()])
    category = StringField(validators=[DataRequired(), AnyOf(EXPENSE_CATEGORIES)])
    description = StringField()
    date = DateTimeField()


class GoalForm(ApiForm):
    aliases = {'user_id': 'userId', 'target_value': 'targetValue', 'current_value': 'currentValue'}

    user_id = IntegerField(validators=[Required()])
    name = StringField(validators=[DataRequired(), Length(max=200)])
    category = StringField(validators=[DataRequired(), AnyOf(GOAL_CATEGORIES)])
    target_value = FloatField(validators=[Required(), Positive()])
    current_value = FloatField()
    unit = StringField(validators=[DataRequired(), Length(max=50)])
    active = BooleanField()
    direction = StringField(validators=[Nullable(), AnyOf(GOAL_DIRECTIONS)])


class DeviceForm(ApiForm):
    aliases = {'user_id': 'userId', 'device_id': 'deviceId', 'last_synced': 'lastSynced'}

    user_id = IntegerField(validators=[Required()])
    name = StringField(validators=[DataRequired(), Length(max=100)])
    device_id = StringField(validators=[DataRequired(), Length(max=100)])
    last_synced = DateTimeField()
    active = BooleanField()
