from django.db import models


class VmailMailbox(models.Model):
    """邮件服务器的邮箱目录（iRedMail vmail.mailbox 表，只读）"""

    # 用户名（邮箱地址）
    username = models.CharField(max_length=255, primary_key=True)

    # 密码（带方案前缀，如 {SSHA512}、{PLAIN}，或 bcrypt 等 crypt 串）
    password = models.CharField(max_length=255)

    # 显示名称
    name = models.CharField(max_length=255, default='')

    # 域名
    domain = models.CharField(max_length=255, db_index=True)

    # 配额（MB）
    quota = models.BigIntegerField(default=0)

    # 存储根目录，如 /var/vmail
    storagebasedirectory = models.CharField(max_length=255, default='')

    # 存储节点，如 vmail1
    storagenode = models.CharField(max_length=255, default='')

    # 用户 maildir 相对路径，如 example.com/u/s/e/user-2024.01.01.00.00.00/
    maildir = models.CharField(max_length=255, default='')

    # 是否激活
    active = models.BooleanField(default=True)

    # 是否允许 SMTP
    enablesmtp = models.BooleanField(default=True)

    # 是否允许 IMAP
    enableimap = models.BooleanField(default=True)

    # 创建时间
    created = models.DateTimeField(null=True)

    class Meta:
        managed = False
        db_table = "mailbox"

    @property
    def is_service_enabled(self) -> bool:
        """Only active mailboxes with both SMTP and IMAP enabled may sign in"""
        return bool(self.active and self.enablesmtp and self.enableimap)
