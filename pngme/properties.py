import logging


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(Dependency('.length'))

    and have the (internal) length of the string contained in the field named 'data'
    strictly connected to the field named 'length': while unpacking the size is
    read from 'length', while building a new chunk 'length' is set from the size
    of 'data'.

    Only the relative syntax is supported, i.e. the expression starts with '.'
    and names a field at the same level.
    '''
    def __init__(self, expression):
        if not expression.startswith('.') or len(expression) < 2:
            raise ValueError(f"dependency '{expression}' must be relative, like '.length'")

        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    @property
    def field_name(self):
        return self.expression[1:]

    def resolve(self, chunk):
        '''With this method we resolve the attribute with respect to the chunk
        passed as argument.'''
        value = chunk.get_value(self.field_name)
        self.logger.debug(' resolved \'%s\' with value %s' % (self.expression, value))

        return value

    def resolve_and_set(self, chunk, value):
        self.logger.debug(' setting \'%s\' to %s' % (self.expression, value))
        chunk._set_value(self.field_name, value)
