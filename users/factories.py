# users/factories.py
import factory
from django.contrib.auth import get_user_model

User = get_user_model()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda obj: f"{obj.username}@example.com")
    first_name = "Test"
    last_name = factory.Sequence(lambda n: f"Reader{n}")
    role = User.ROLE_USER

    @factory.post_generation
    def password(self, create, extracted, **kwargs):
        self.set_password(extracted or "password123")
        if create:
            self.save()


class AdminFactory(UserFactory):
    role = User.ROLE_ADMIN


class SuperAdminFactory(UserFactory):
    role = User.ROLE_SUPERADMIN
