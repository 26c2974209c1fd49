import pymysql

# the vmail directory is reached through PyMySQL, registered as the MySQLdb module Django expects
pymysql.install_as_MySQLdb()
