class VmailRouter:
    """
    Route the mailbox directory model to the mail server's database.
    Nothing is ever migrated into that database.
    """

    route_model_names = {'vmailmailbox'}
    route_db_alias = 'vmail'

    def db_for_read(self, model, **hints):
        if model._meta.model_name in self.route_model_names:
            return self.route_db_alias
        return None  # None means use default database

    def db_for_write(self, model, **hints):
        if model._meta.model_name in self.route_model_names:
            return self.route_db_alias
        return None

    def allow_relation(self, obj1, obj2, **hints):
        return None

    def allow_migrate(self, db, app_label, model_name=None, **hints):
        if db == self.route_db_alias:
            return False
        if model_name in self.route_model_names:
            return False
        return None
